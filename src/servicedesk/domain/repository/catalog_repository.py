"""Abstract read-only directories for clients, technicians and services."""

from __future__ import annotations

from abc import ABC, abstractmethod

from servicedesk.domain.model.catalog import Client, Service, Technician


class ClientDirectory(ABC):

    @abstractmethod
    def get_by_id(self, client_id: str) -> Client | None:
        """Return a client by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Client]:
        """Return every client."""


class TechnicianDirectory(ABC):

    @abstractmethod
    def get_by_id(self, technician_id: str) -> Technician | None:
        """Return a technician by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Technician]:
        """Return every technician."""


class ServiceCatalog(ABC):

    @abstractmethod
    def get_by_id(self, service_id: str) -> Service | None:
        """Return a billable service by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Service]:
        """Return every billable service."""
