"""SiteCMS Backend: Service Repository."""

from sitecms.models.service import Service
from sitecms.repositories.base import Repository


class ServiceRepository(Repository[Service]):
    model = Service
    resource_name = "service"
