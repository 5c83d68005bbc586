"""
Sundry Manager - lazily created, cached named drivers

A Manager resolves driver names to driver instances, either through loader callables registered with
extend() or through create_<name>_driver() methods defined by subclasses. Each driver is created once and
cached. Attribute access the manager does not handle itself is forwarded to the default driver.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import importlib.util
import logging

from collections.abc import Mapping
from typing import Any, Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import DriverError
from .formatters import fmt_type
from .placeholders import PlaceholderBag
from .strings import snake, studly

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------

class Driver:
    """
    Base class for drivers managed by a Manager.

    Subclasses describe themselves with metadata (at least one of name, description, author, version
    or copyright), the config keys they require and the modules they depend on. The integrity check runs
    on construction.

    Examples:
        >>> class FileStore(Driver):
        ...     name = "file"
        ...     config_items = ("path",)
        >>> FileStore({"root": "/srv", "path": "%root%/cache"}).config.get("path")
        '/srv/cache'
    """

    # @formatter:off
    name: str | None = None
    description: str | None = None
    author: str | None = None
    version: str | None = None
    copyright: str | None = None

    config_items: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    # @formatter:on

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        self.config = PlaceholderBag(config)
        self.check_integrity()
        self.config.resolve()

    def check_integrity(self) -> bool:
        """
        Verify the driver metadata, its required config keys and its importable dependencies.

        Raises:
            DriverError: If any check fails.
        """
        label = self.name or type(self).__name__

        if not any((self.name, self.description, self.author, self.version, self.copyright)):
            raise DriverError(f"integrity check failed for driver [{label}]: no metadata", driver=label)

        missing = [item for item in self.config_items if not self.config.has(item)]
        if missing:
            raise DriverError(f"integrity check failed for driver [{label}]: missing config {missing}",
                              driver=label)

        unavailable = [module for module in self.dependencies if not _importable(module)]
        if unavailable:
            raise DriverError(f"integrity check failed for driver [{label}]: missing dependencies {unavailable}",
                              driver=label)

        return True

    def metadata(self) -> dict[str, str | None]:
        return {"name": self.name,
                "description": self.description,
                "author": self.author,
                "version": self.version,
                "copyright": self.copyright}


class Manager:
    """
    Create and cache named drivers.

    Args:
        config: Optional mapping with "default" (the default driver name) and "loaders" (a mapping of
            driver name to a zero-argument callable building the driver).

    Examples:
        >>> class Cache(Manager):
        ...     def create_memory_driver(self):
        ...         return {}
        >>> cache = Cache({"default": "memory"})
        >>> cache.driver() is cache.driver("memory")
        True
    """

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        self._loaders: dict[str, Callable[[], Any]] = {}
        self._drivers: dict[str, Any] = {}

        config = config or {}
        if not isinstance(config, Mapping):
            raise TypeError(f"config must be a Mapping, got {fmt_type(config)}")

        self._default: str | None = config.get("default")

        loaders = config.get("loaders") or {}
        if not isinstance(loaders, Mapping):
            raise TypeError(f"loaders must be a Mapping of driver name to callable, got {fmt_type(loaders)}")
        for name, loader in loaders.items():
            self.extend(name, loader)

    def extend(self, name: str, loader: Callable[[], Any]) -> "Manager":
        """Register a loader callable for a driver name, replacing any previous one."""
        if not callable(loader):
            raise TypeError(f"loader for driver [{name}] must be callable, got {fmt_type(loader)}")
        self._loaders[name] = loader
        return self

    def driver(self, name: str | None = None) -> Any:
        """
        Get a driver instance, creating it on first use.

        Raises:
            DriverError: If no name is given and there is no default, or the driver is not supported.
        """
        name = name or self.get_default_driver()
        if name is None:
            raise DriverError(f"unable to resolve NULL driver for [{type(self).__name__}]")

        if name not in self._drivers:
            self._drivers[name] = self._create_driver(name)
            logger.debug("%s created driver [%s]", type(self).__name__, name)

        return self._drivers[name]

    def get_default_driver(self) -> str | None:
        return self._default

    def get_drivers(self) -> dict[str, Any]:
        """Return the drivers created so far, by name."""
        return dict(self._drivers)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            driver = self.driver()
        except DriverError as exc:
            raise AttributeError(name) from exc
        return getattr(driver, name)

    def _create_driver(self, name: str) -> Any:
        if name in self._loaders:
            return self._loaders[name]()

        method = getattr(type(self), f"create_{snake(studly(name))}_driver", None)
        if method is None:
            raise DriverError(f"driver [{name}] not supported", driver=name)
        return method(self)


# Private Methods ------------------------------------------------------------------------------------------------------

def _importable(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        return False
