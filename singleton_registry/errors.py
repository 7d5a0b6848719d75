class RegistryError(Exception):
    """Base class for registry failures."""


class DuplicateNameError(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"Instance '{name}' already registered")
        self.name = name


class NotFoundError(RegistryError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"Instance '{name}' not found")
        self.name = name


class ManifestError(RegistryError):
    """Malformed manifest document or item."""
