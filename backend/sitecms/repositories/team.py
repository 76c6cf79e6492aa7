"""SiteCMS Backend: Team Member Repository."""

from sitecms.models.team import TeamMember
from sitecms.repositories.base import Repository


class TeamRepository(Repository[TeamMember]):
    model = TeamMember
    resource_name = "team member"
