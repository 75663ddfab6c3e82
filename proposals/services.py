"""
Proposals Service Layer

Bridges the framework-agnostic ProposalLifecycle in the core module
with Django's ORM.
"""
from django.contrib.auth import get_user_model

from core.proposal_engine import ProposalLifecycle
from .models import Proposal


class DjangoProposalStore:
    """ProposalStore backed by the Django ORM."""

    def find_user_by_email(self, email: str | None):
        """Return the user with this email (case-insensitive), or None."""
        if not email:
            return None
        return get_user_model().objects.filter(email__iexact=email).first()

    def create_proposal(self, data: dict) -> Proposal:
        return Proposal.objects.create(**data)

    def find_proposals(self, created_by_id) -> list[Proposal]:
        return list(Proposal.objects.filter(created_by_id=created_by_id))

    def find_proposal(self, proposal_id) -> Proposal | None:
        return Proposal.objects.filter(pk=proposal_id).first()

    def update_proposal(self, proposal_id, data: dict) -> Proposal:
        """
        Apply data to an existing proposal.

        Raises:
            Proposal.DoesNotExist: If no proposal has this id
        """
        proposal = Proposal.objects.get(pk=proposal_id)
        for field, value in data.items():
            setattr(proposal, field, value)
        proposal.save()
        return proposal

    def delete_proposal(self, proposal_id) -> Proposal:
        """
        Delete a proposal.

        Raises:
            Proposal.DoesNotExist: If no proposal has this id
        """
        proposal = Proposal.objects.get(pk=proposal_id)
        proposal.delete()
        return proposal


def get_proposal_service() -> ProposalLifecycle:
    """Build the proposal lifecycle over the ORM store."""
    return ProposalLifecycle(DjangoProposalStore())
