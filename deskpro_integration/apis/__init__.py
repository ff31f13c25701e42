from .organizations import OrganizationsApi
from .people import PeopleApi
from .tickets import TicketsApi

__all__ = ["OrganizationsApi", "PeopleApi", "TicketsApi"]
