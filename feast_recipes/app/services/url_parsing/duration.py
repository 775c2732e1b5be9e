"""ISO-8601 duration parsing."""


def parse_iso8601_duration(duration: str) -> int:
    """Parse an ISO-8601 duration such as ``PT1H30M`` into whole minutes.

    Hours and minutes are summed, seconds are dropped and any other
    designator (days, weeks) is ignored together with its number. Input that
    does not start with ``P`` yields 0.
    """
    if not isinstance(duration, str) or not duration.startswith("P"):
        return 0

    idx = 1
    if idx < len(duration) and duration[idx] == "T":
        idx += 1

    minutes = 0
    number = ""
    for char in duration[idx:]:
        if char.isascii() and char.isdigit():
            number += char
            continue
        value = int(number) if number else 0
        number = ""
        if char == "H":
            minutes += value * 60
        elif char == "M":
            minutes += value
    return minutes
