"""Role-to-navigation mapping.

Labels are message-catalog keys; the HTTP layer localizes them.
"""

from typing import NamedTuple

from identity_api.models.user import UserRole


class MenuEntry(NamedTuple):
    label: str
    path: str


_MENUS: dict[UserRole, tuple[MenuEntry, ...]] = {
    UserRole.ADMIN: (
        MenuEntry("menu.user.management", "/admin/users"),
        MenuEntry("menu.system.settings", "/admin/settings"),
        MenuEntry("menu.sales.management", "/sales"),
        MenuEntry("menu.reports", "/reports"),
    ),
    UserRole.SALES: (
        MenuEntry("menu.sales.management", "/sales"),
        MenuEntry("menu.customer.management", "/customers"),
        MenuEntry("menu.reports", "/reports"),
    ),
    UserRole.USER: (
        MenuEntry("menu.profile", "/profile"),
        MenuEntry("menu.settings", "/settings"),
    ),
}


def menu_for(role: UserRole | str) -> list[MenuEntry]:
    """Return the ordered navigation entries authorized for a role.

    Args:
        role: The user's role.

    Returns:
        Menu entries in display order.

    Raises:
        ValueError: If ``role`` is not a known role.
    """
    return list(_MENUS[UserRole(role)])
