from __future__ import annotations

from .links import LinkMap

# Link names as advertised by the broker.
GET = "GET"
UPDATE = "UPDATE"
DELETE = "DELETE"

LIST_DOMAINS = "LIST_DOMAINS"
ADD_DOMAIN = "ADD_DOMAIN"
GET_USER = "GET_USER"

LIST_APPLICATIONS = "LIST_APPLICATIONS"
ADD_APPLICATION = "ADD_APPLICATION"

START = "START"
STOP = "STOP"
FORCE_STOP = "FORCE_STOP"
RESTART = "RESTART"
SCALE_UP = "SCALE_UP"
SCALE_DOWN = "SCALE_DOWN"

LIST_ENVIRONMENT_VARIABLES = "LIST_ENVIRONMENT_VARIABLES"
ADD_ENVIRONMENT_VARIABLE = "ADD_ENVIRONMENT_VARIABLE"
SET_UNSET_ENVIRONMENT_VARIABLES = "SET_UNSET_ENVIRONMENT_VARIABLES"

LIST_CARTRIDGES = "LIST_CARTRIDGES"
ADD_CARTRIDGE = "ADD_CARTRIDGE"

LIST_ALIASES = "LIST_ALIASES"
ADD_ALIAS = "ADD_ALIAS"

GET_GEAR_GROUPS = "GET_GEAR_GROUPS"


class CapabilityNegotiator:
    """
    Answers "may this resource do X" from a LinkMap snapshot.
    Built anew every time the owning resource replaces its links.
    """

    def __init__(self, links: LinkMap):
        self._links = links

    def can(self, link_name: str) -> bool:
        return self._links.has(link_name)

    # --- environment variables ---
    def can_get_environment_variables(self) -> bool:
        return self.can(LIST_ENVIRONMENT_VARIABLES)

    def can_update_environment_variables(self) -> bool:
        return self.can(SET_UNSET_ENVIRONMENT_VARIABLES)

    def can_add_environment_variable(self) -> bool:
        return self.can(ADD_ENVIRONMENT_VARIABLE)

    # --- cartridges / aliases / gears ---
    def can_list_cartridges(self) -> bool:
        return self.can(LIST_CARTRIDGES)

    def can_add_cartridge(self) -> bool:
        return self.can(ADD_CARTRIDGE)

    def can_list_aliases(self) -> bool:
        return self.can(LIST_ALIASES)

    def can_add_alias(self) -> bool:
        return self.can(ADD_ALIAS)

    def can_get_gear_groups(self) -> bool:
        return self.can(GET_GEAR_GROUPS)

    # --- lifecycle ---
    def can_start(self) -> bool:
        return self.can(START)

    def can_stop(self) -> bool:
        return self.can(STOP)

    def can_restart(self) -> bool:
        return self.can(RESTART)

    def can_scale(self) -> bool:
        return self.can(SCALE_UP) and self.can(SCALE_DOWN)

    def can_destroy(self) -> bool:
        return self.can(DELETE)

    def can_update(self) -> bool:
        return self.can(UPDATE)
