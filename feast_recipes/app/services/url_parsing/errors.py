"""Typed failures for fetching a recipe page and reading its recipe data.

Both hierarchies are fatal to the current import; mapping a failure to text
shown to a person happens at the call site (see ``recipe_import_service``).
"""


class FetchError(Exception):
    """Base class for failures while fetching a page."""

    error_code = "fetch_failed"


class InvalidUrlError(FetchError):
    error_code = "invalid_url"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid URL: {detail}")


class InvalidUrlSchemeError(FetchError):
    error_code = "invalid_url"

    def __init__(self, scheme: str = ""):
        self.scheme = scheme
        super().__init__("Invalid URL scheme: only HTTP and HTTPS are supported")


class ConnectionFailedError(FetchError):
    error_code = "connection_failed"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Connection failed: {detail}")


class FetchTimeoutError(FetchError):
    error_code = "fetch_timeout"

    def __init__(self, seconds: float):
        self.seconds = seconds
        super().__init__(f"Request timed out after {seconds:g} seconds")


class TooManyRedirectsError(FetchError):
    error_code = "too_many_redirects"

    def __init__(self, max_redirects: int):
        self.max_redirects = max_redirects
        super().__init__(f"Too many redirects (max {max_redirects})")


class HttpStatusError(FetchError):
    error_code = "http_error"

    def __init__(self, status: int, phrase: str):
        self.status = status
        self.phrase = phrase
        super().__init__(f"HTTP error {status}: {phrase}")


class InvalidContentTypeError(FetchError):
    error_code = "unsupported_content_type"

    def __init__(self, mime: str):
        self.mime = mime
        super().__init__(f"Invalid content type: expected HTML, got {mime}")


class ResponseTooLargeError(FetchError):
    error_code = "response_too_large"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Response too large: exceeds {limit} bytes")


class ResponseReadError(FetchError):
    error_code = "read_error"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Failed to read response: {detail}")


class ParseError(Exception):
    """Base class for failures while locating or reading recipe data."""

    error_code = "parse_failed"


class NoJsonLdFoundError(ParseError):
    error_code = "no_json_ld"

    def __init__(self):
        super().__init__("No JSON-LD data found on page")


class NoRecipeFoundError(ParseError):
    error_code = "no_recipe_found"

    def __init__(self):
        super().__init__("No Recipe found in JSON-LD data")


class MultipleRecipesFoundError(ParseError):
    error_code = "multiple_recipes_found"

    def __init__(self, count: int = 2):
        self.count = count
        super().__init__("Multiple recipes found on page - unable to determine which to import")


class MalformedRecipeError(ParseError):
    error_code = "malformed_recipe"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Recipe data is malformed: {reason}")
