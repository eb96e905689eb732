"""Fatal source errors.

Every adapter failure aborts the whole run. These exceptions carry enough
context for an operator to see which source broke and why.
"""


class SourceError(Exception):
    """Base class for adapter failures.

    Attributes:
        source_name: The scraper source that failed.
    """

    def __init__(self, source_name: str, message: str):
        self.source_name = source_name
        super().__init__(f"{source_name}: {message}")


class IntegrityError(SourceError):
    """Raised when correlated sub-responses from one source disagree.

    The data cannot be trusted, so nothing from the run is written.
    """


class PaginationLimitError(SourceError):
    """Raised when a source returns at least ``ceiling`` results.

    The scraper does not paginate; a full page means results may have been
    truncated upstream.

    Attributes:
        count: Number of results returned.
        ceiling: Configured pagination ceiling.
    """

    def __init__(self, source_name: str, count: int, ceiling: int):
        self.count = count
        self.ceiling = ceiling
        super().__init__(
            source_name,
            f"{count} results returned (ceiling {ceiling}); "
            f"results may be truncated, pagination is required",
        )


class MissingCredentialError(SourceError):
    """Raised when a source's API key environment variable is not set.

    Attributes:
        env_var: Name of the missing environment variable.
    """

    def __init__(self, source_name: str, env_var: str):
        self.env_var = env_var
        super().__init__(source_name, f"{env_var} is not set")
