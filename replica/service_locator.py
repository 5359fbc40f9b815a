"""Service locator for the replica's single service instance."""

from typing import Optional

from replica.service import ReplicaService

_replica_service: Optional[ReplicaService] = None


def set_replica_service(service: Optional[ReplicaService]):
    """Set global replica service instance"""
    global _replica_service
    _replica_service = service


def get_replica_service() -> Optional[ReplicaService]:
    """Get global replica service instance"""
    return _replica_service
