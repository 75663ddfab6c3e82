"""
Proposal Engine

Pure Python business logic, framework-agnostic.
This module should have NO Django imports.

ProposalLifecycle runs create/read/list/update/delete over proposals against
an injected store. Every operation logs each step and turns any fault raised
once the store is involved into an InternalServerError.
"""

import logging
from typing import Any, Mapping, Optional, Protocol

from .errors import InternalServerError, NotFoundError


class ProposalStore(Protocol):
    """Persistence operations the lifecycle needs."""

    def find_user_by_email(self, email: str) -> Optional[Any]: ...

    def create_proposal(self, data: dict) -> Any: ...

    def find_proposals(self, created_by_id: Any) -> Optional[list]: ...

    def find_proposal(self, proposal_id: Any) -> Optional[Any]: ...

    def update_proposal(self, proposal_id: Any, data: Mapping[str, Any]) -> Any: ...

    def delete_proposal(self, proposal_id: Any) -> Any: ...


class ProposalLifecycle:
    """
    Stateless proposal service over a store and a logger.

    Args:
        store: Object implementing ProposalStore
        logger: Object with info/warning/error (defaults to this module's logger)
    """

    def __init__(self, store: ProposalStore, logger=None):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    def create_proposal(self, data: Mapping[str, Any], user_id) -> Any:
        """
        Create a proposal between a client and a service provider.

        Args:
            data: title, description, duration, payment_terms, status,
                client (email) and service_provider (email)
            user_id: Identity of the requesting user

        Returns:
            The created proposal record

        Raises:
            NotFoundError: If user_id is absent (no store call is made)
            InternalServerError: On any fault once the store is involved,
                including a client or service provider that does not exist
        """
        self.logger.info("Creating a proposal by user: %s", user_id)
        if not user_id:
            self.logger.warning("User not found for id: %s", user_id)
            raise NotFoundError("User not found")

        try:
            client = self.store.find_user_by_email(data.get("client"))
            service_provider = self.store.find_user_by_email(data.get("service_provider"))

            if not client or not service_provider:
                raise NotFoundError("Client or Service Provider not found")

            proposal = self.store.create_proposal(
                {
                    "title": data.get("title"),
                    "description": data.get("description"),
                    "duration": data.get("duration"),
                    "payment_terms": data.get("payment_terms"),
                    "status": data.get("status"),
                    "client_id": client.id,
                    "service_provider_id": service_provider.id,
                    "created_by_id": user_id,
                }
            )
        except Exception as e:
            self.logger.error(
                "Error creating proposal for user %s: %s", user_id, e, exc_info=True
            )
            raise InternalServerError("Unable to create proposal") from e

        self.logger.info("Proposal created successfully: %s", proposal.id)
        return proposal

    def get_all_proposals(self, user_id) -> dict:
        """List the proposals created by user_id as {"proposals": [...], "count": n}."""
        self.logger.info("Fetching all proposals for user: %s", user_id)
        if not user_id:
            self.logger.warning("User not found for id: %s", user_id)
            raise NotFoundError("User not found")

        try:
            proposals = self.store.find_proposals(user_id)
            if proposals is None:
                raise NotFoundError(f"No proposals found for user {user_id}")
            proposals = list(proposals)
        except Exception as e:
            self.logger.error(
                "Error fetching proposals for user %s: %s", user_id, e, exc_info=True
            )
            raise InternalServerError("Unable to fetch proposals") from e

        count = len(proposals)
        self.logger.info("Fetched %d proposals for user: %s", count, user_id)
        return {"proposals": proposals, "count": count}

    def get_proposal_by_id(self, proposal_id) -> Any:
        """
        Fetch one proposal.

        A miss raises NotFoundError directly instead of being re-wrapped
        like the other operations' not-found paths.
        """
        self.logger.info("Fetching proposal with ID: %s", proposal_id)
        try:
            proposal = self.store.find_proposal(proposal_id)
        except Exception as e:
            self.logger.error(
                "Error fetching proposal with ID %s: %s", proposal_id, e, exc_info=True
            )
            raise InternalServerError("Unable to fetch proposal") from e

        if not proposal:
            self.logger.warning("Proposal with ID %s not found", proposal_id)
            raise NotFoundError(f"Proposal with ID {proposal_id} not found")

        self.logger.info("Fetched proposal with ID: %s", proposal_id)
        return proposal

    def update_proposal(self, proposal_id, patch: Mapping[str, Any]) -> dict:
        """Apply patch as-is and return {"message": ..., "proposal": updated}."""
        self.logger.info("Updating proposal with ID: %s", proposal_id)
        if not proposal_id:
            self.logger.warning("Proposal ID is required for update")
            raise NotFoundError("Proposal ID is required")

        try:
            proposal = self.store.update_proposal(proposal_id, patch)
        except Exception as e:
            self.logger.error(
                "Error updating proposal with ID %s: %s", proposal_id, e, exc_info=True
            )
            raise InternalServerError("Unable to update proposal") from e

        self.logger.info("Updated proposal with ID: %s", proposal_id)
        return {"message": f"Proposal with ID {proposal_id} has been updated", "proposal": proposal}

    def delete_proposal(self, proposal_id) -> dict:
        """Delete one proposal. Deleting an already-deleted id raises InternalServerError."""
        self.logger.info("Deleting proposal with ID: %s", proposal_id)
        if not proposal_id:
            self.logger.warning("Proposal ID is required for delete")
            raise NotFoundError("Proposal ID is required")

        try:
            self.store.delete_proposal(proposal_id)
        except Exception as e:
            self.logger.error(
                "Error deleting proposal with ID %s: %s", proposal_id, e, exc_info=True
            )
            raise InternalServerError("Unable to delete proposal") from e

        self.logger.info("Deleted proposal with ID: %s", proposal_id)
        return {"message": f"Proposal with ID {proposal_id} has been deleted"}
