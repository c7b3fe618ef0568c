from __future__ import annotations

import re
from typing import Optional

from component_broker.config.settings import DEFAULT_INTERFACE_MASK  # noqa: F401


def derive_implementation_identifier(
    identifier: str, mask: str, name: Optional[str] = None
) -> str:
    """
    Map a capability identifier to its conventional implementation identifier.

    The mask is a regular expression removed from the simple name; the result
    replaces the simple name at the end of the identifier:

        derive_implementation_identifier("app.repos.IUserRepo", "^I")
            → "app.repos.UserRepo"
        derive_implementation_identifier("app.repos.UserRepoInterface", "Interface$")
            → "app.repos.UserRepo"

    An invalid mask raises re.error.
    """
    simple = name or identifier.rsplit(".", 1)[-1]
    stripped = re.sub(mask, "", simple)
    if not identifier.endswith(simple):
        return identifier.replace(simple, stripped)
    return identifier[: len(identifier) - len(simple)] + stripped
