"""Discovery of decorated classes.

A class is an element group when at least one attribute in its own
namespace carries template metadata (see etgen_core.annotations.template).
Each group produces one output file named after the class. Classes nested
in a class body are found as well and form groups of their own.

Only a class's own namespace is read: decorated methods inherited from a
base class are not collected again for the subclass, so a template id is
written to exactly one file (the base class's, when the base is scanned).

Packages named in the configuration are imported and walked recursively.
Groups are returned in a stable order: by module name, then by class
definition order within the module.
"""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from collections.abc import Iterable
from dataclasses import dataclass
from types import ModuleType

import structlog

from etgen_core.annotations import get_template_metadata
from etgen_core.errors import EtgenError
from etgen_core.schemas import PropertyMetadata, TemplateMetadata

logger = structlog.get_logger(__name__)


class DiscoveryError(EtgenError):
    """Raised when a package cannot be imported or walked.

    Attributes:
        module: Name of the module that failed.
    """

    def __init__(
        self,
        user_message: str,
        *,
        module: str,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(f"{user_message}: {module}", internal_details=internal_details)
        self.module = module


@dataclass(frozen=True)
class TemplateGroup:
    """Templates declared on one class.

    Attributes:
        name: Class name, used for the output file name.
        module: Module defining the class.
        records: One metadata record per decorated method, with the class-level
            properties appended to each.
    """

    name: str
    module: str
    records: tuple[TemplateMetadata, ...]

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.name}"


def discover_groups(packages: Iterable[str]) -> list[TemplateGroup]:
    """Import the named packages and collect their element groups.

    Args:
        packages: Package or module names.

    Returns:
        Groups ordered by module name, then class definition order.

    Raises:
        DiscoveryError: If a package or one of its modules fails to import.
    """
    modules: dict[str, ModuleType] = {}
    for package in packages:
        for module in _walk(package):
            modules.setdefault(module.__name__, module)

    groups: list[TemplateGroup] = []
    for name in sorted(modules):
        groups.extend(groups_in_module(modules[name]))

    logger.debug("discovery_completed", modules=len(modules), groups=len(groups))
    return groups


def groups_in_module(module: ModuleType) -> list[TemplateGroup]:
    """Return the element groups defined (not re-exported) in a module.

    Classes nested in a module-level class are groups of their own and
    follow their enclosing class.
    """
    groups: list[TemplateGroup] = []
    seen: set[int] = set()
    for obj in list(vars(module).values()):
        if not inspect.isclass(obj) or obj.__module__ != module.__name__:
            continue
        for cls in _with_nested(obj):
            if id(cls) in seen:
                continue
            seen.add(id(cls))
            group = group_for_class(cls)
            if group is not None:
                groups.append(group)
    return groups


def _with_nested(cls: type) -> list[type]:
    """Return ``cls`` followed by the classes defined in its body, depth first."""
    classes = [cls]
    for obj in vars(cls).values():
        if inspect.isclass(obj) and obj.__qualname__ == f"{cls.__qualname__}.{obj.__name__}":
            classes.extend(_with_nested(obj))
    return classes


def group_for_class(cls: type) -> TemplateGroup | None:
    """Collect the template records declared on a class.

    Every record gets the method's own properties first, followed by the
    class-level properties in declaration order.

    Returns:
        TemplateGroup, or None if the class declares no template.
    """
    namespace = vars(cls)
    class_properties = tuple(v for v in namespace.values() if isinstance(v, PropertyMetadata))

    records: list[TemplateMetadata] = []
    for attribute in namespace.values():
        metadata = get_template_metadata(attribute)
        if metadata is None:
            continue
        if class_properties:
            metadata = metadata.model_copy(
                update={"properties": metadata.properties + class_properties}
            )
        records.append(metadata)

    if not records:
        return None
    return TemplateGroup(name=cls.__name__, module=cls.__module__, records=tuple(records))


def _walk(package: str) -> list[ModuleType]:
    """Import a package and all of its submodules."""
    root = _import(package)
    modules = [root]

    search_path = getattr(root, "__path__", None)
    if search_path is None:
        return modules

    def onerror(name: str) -> None:
        raise DiscoveryError("Failed to import package", module=name)

    for info in pkgutil.walk_packages(search_path, prefix=f"{root.__name__}.", onerror=onerror):
        modules.append(_import(info.name))

    return modules


def _import(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except Exception as e:
        raise DiscoveryError(
            "Failed to import module",
            module=name,
            internal_details=f"{type(e).__name__}: {e}",
        ) from e
