"""
WASB path parsing.

Accepted forms:
- example/data/data.txt                                   -> default container
- /example/data/data.txt                                  -> default container
- wasb:///example/data/data.txt                           -> default container
- wasb://container@account.blob.core.windows.net/example  -> explicit account
Anything else is taken verbatim as a blob key.
"""

from dataclasses import dataclass

from hdstorage.errors import InvalidAddress
from hdstorage.models.cluster import short_account_name


@dataclass(frozen=True)
class ParsedPath:
    """Result of parsing a path expression, before directory lookup."""

    blob_key: str
    container: str | None = None
    account_host: str | None = None

    @property
    def has_authority(self) -> bool:
        return self.account_host is not None

    @property
    def account_name(self) -> str | None:
        if self.account_host is None:
            return None
        return short_account_name(self.account_host)


class WasbPath:
    """
    Parsing and formatting of wasb[s]:// paths.
    """

    SCHEMES = ("wasbs:", "wasb:")

    @staticmethod
    def strip_scheme(expression: str) -> tuple[str | None, str]:
        """
        Remove a leading scheme token, matched as an exact prefix.

        Returns:
            Tuple of (scheme or None, remainder)
        """
        for token in WasbPath.SCHEMES:
            if expression.startswith(token):
                return token[:-1], expression[len(token) :]
        return None, expression

    @staticmethod
    def parse_authority(authority: str, expression: str | None = None) -> tuple[str, str]:
        """
        Split 'container@account.domain' into (container, account host).

        Raises:
            InvalidAddress: if '@', the container or the domain is missing
        """
        container, sep, host = authority.partition("@")
        if not sep:
            raise InvalidAddress("Authority must be 'container@account.domain'", expression)
        if not container:
            raise InvalidAddress("Authority is missing the container name", expression)
        account, dot, domain = host.partition(".")
        if not account or not dot or not domain:
            raise InvalidAddress(
                f"Storage account host '{host}' must be 'account.domain'", expression
            )
        return container, host

    @staticmethod
    def parse(expression: str) -> ParsedPath:
        """
        Parse a path expression into blob key and optional authority.

        Args:
            expression: User-supplied path in any accepted form

        Returns:
            ParsedPath; container/account are None for default-storage forms
        """
        _, remainder = WasbPath.strip_scheme(expression)

        if remainder.startswith("///"):
            return ParsedPath(blob_key=remainder[3:])

        if remainder.startswith("//"):
            authority, _, blob_key = remainder[2:].partition("/")
            container, host = WasbPath.parse_authority(authority, expression)
            return ParsedPath(blob_key=blob_key, container=container, account_host=host)

        if expression.startswith("/"):
            return ParsedPath(blob_key=expression[1:])

        # Unrecognised prefixes (including 'wasb:' without '//') are raw keys
        return ParsedPath(blob_key=expression)

    @staticmethod
    def to_uri(
        container: str,
        account_name: str,
        blob_key: str = "",
        endpoint_suffix: str = "core.windows.net",
        scheme: str = "wasbs",
    ) -> str:
        """Format a fully qualified wasb URI."""
        return f"{scheme}://{container}@{account_name}.blob.{endpoint_suffix}/{blob_key}"

    @staticmethod
    def get_name(blob_key: str) -> str:
        """Last component of a blob key."""
        return blob_key.rstrip("/").rsplit("/", 1)[-1]

    @staticmethod
    def is_folder(blob_key: str) -> bool:
        """Check if the key denotes the container root or a folder prefix."""
        return blob_key == "" or blob_key.endswith("/")
