from typing import Iterable, List

from core.state import Module
from exceptions.custom_errors import InvalidModuleError


def validate_modules(modules: Iterable[Module]) -> List[Module]:
    """
    Validate the module feed before any generation attempt.

    Args:
        modules (Iterable[Module]): Modules in certificate order.

    Returns:
        List[Module]: The modules as a list, order preserved.

    Raises:
        InvalidModuleError: If a module id is duplicated, empty, or a module declares negative hours.
    """
    modules = list(modules)
    errors = []
    seen = set()
    duplicated = set()

    for module in modules:
        if not str(module.id).strip():
            errors.append(f" • Module {module.code!r} has an empty id.\n")
        if module.id in seen:
            duplicated.add(module.id)
        seen.add(module.id)
        if module.hours_total < 0:
            errors.append(
                f" • Module {module.code!r} declares negative hours ({module.hours_total:g}).\n"
            )

    if duplicated:
        errors.append(f" • Duplicate module ids: {', '.join(sorted(duplicated))}\n")

    if errors:
        errors.insert(0, "Recheck the module feed:\n")
        raise InvalidModuleError("".join(errors))

    return modules
