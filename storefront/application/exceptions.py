"""Service-level exceptions."""


class StorefrontError(Exception):
    """Base class for errors raised by storefront services."""


class CatalogError(StorefrontError):
    """Reading the product catalog failed."""


class LLMError(StorefrontError):
    """The hosted language model could not produce a completion."""
