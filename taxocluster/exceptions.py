"""Exceptions raised by the taxonomy clustering pipeline."""


class TaxonomyError(Exception):
    """Base class for taxonomy related errors."""


class CyclicAliasError(TaxonomyError):
    """Synonym resolution did not terminate: the alias chain contains a cycle."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Cyclic synonym chain while resolving {token!r}")


class TaxonomyConfigError(TaxonomyError):
    """A taxonomy configuration file is missing or malformed."""
