"""
Tests for the framework-agnostic proposal lifecycle.
"""
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from core.errors import InternalServerError, NotFoundError
from core.proposal_engine import ProposalLifecycle


def _proposal_data(**overrides):
    """Helper to build a create payload."""
    data = {
        'title': 'New Proposal',
        'description': 'Proposal description',
        'duration': 30,
        'payment_terms': 'Monthly',
        'status': 'PENDING',
        'client': 'client@example.com',
        'service_provider': 'provider@example.com',
    }
    data.update(overrides)
    return data


class LifecycleTestCase(unittest.TestCase):
    """Base case wiring a lifecycle to a mock store and logger."""

    def setUp(self):
        self.store = MagicMock()
        self.logger = MagicMock()
        self.service = ProposalLifecycle(self.store, self.logger)


class TestConstruction(unittest.TestCase):
    """Tests for ProposalLifecycle construction."""

    def test_default_logger(self):
        """A module logger is used when none is given."""
        service = ProposalLifecycle(MagicMock())
        self.assertEqual(service.logger.name, 'core.proposal_engine')

    def test_keeps_collaborators(self):
        """Store and logger are kept as given."""
        store, logger = MagicMock(), MagicMock()
        service = ProposalLifecycle(store, logger)
        self.assertIs(service.store, store)
        self.assertIs(service.logger, logger)


class TestCreateProposal(LifecycleTestCase):
    """Tests for create_proposal."""

    def test_create_uses_resolved_ids(self):
        """Proposal is written with resolved user ids, not emails."""
        client = SimpleNamespace(id=11)
        provider = SimpleNamespace(id=22)
        created = SimpleNamespace(id='proposal-1')
        self.store.find_user_by_email.side_effect = [client, provider]
        self.store.create_proposal.return_value = created

        result = self.service.create_proposal(_proposal_data(), 'user-1')

        self.assertIs(result, created)
        self.store.create_proposal.assert_called_once_with({
            'title': 'New Proposal',
            'description': 'Proposal description',
            'duration': 30,
            'payment_terms': 'Monthly',
            'status': 'PENDING',
            'client_id': 11,
            'service_provider_id': 22,
            'created_by_id': 'user-1',
        })

    def test_lookups_by_email_in_order(self):
        """Client is looked up before the service provider."""
        self.store.find_user_by_email.side_effect = [
            SimpleNamespace(id=1), SimpleNamespace(id=2)
        ]
        self.store.create_proposal.return_value = SimpleNamespace(id='p')

        self.service.create_proposal(_proposal_data(), 'user-1')

        emails = [c.args[0] for c in self.store.find_user_by_email.call_args_list]
        self.assertEqual(emails, ['client@example.com', 'provider@example.com'])

    def test_missing_user_id_raises_not_found(self):
        """Absent actor identity fails before touching the store."""
        for user_id in (None, ''):
            with self.assertRaises(NotFoundError):
                self.service.create_proposal(_proposal_data(), user_id)

        self.store.find_user_by_email.assert_not_called()
        self.store.create_proposal.assert_not_called()
        self.logger.error.assert_not_called()

    def test_missing_client_raises_internal_error(self):
        """A client that does not exist surfaces as InternalServerError."""
        self.store.find_user_by_email.side_effect = [None, SimpleNamespace(id=2)]

        with self.assertRaises(InternalServerError) as ctx:
            self.service.create_proposal(_proposal_data(), 'user-1')

        self.assertEqual(ctx.exception.message, 'Unable to create proposal')
        self.assertIsInstance(ctx.exception.__cause__, NotFoundError)
        self.store.create_proposal.assert_not_called()

    def test_missing_service_provider_raises_internal_error(self):
        """A service provider that does not exist surfaces as InternalServerError."""
        self.store.find_user_by_email.side_effect = [SimpleNamespace(id=1), None]

        with self.assertRaises(InternalServerError):
            self.service.create_proposal(_proposal_data(), 'user-1')

        self.logger.error.assert_called_once()

    def test_store_failure_logs_and_raises(self):
        """A failing write is logged once and re-raised as InternalServerError."""
        self.store.find_user_by_email.return_value = SimpleNamespace(id=1)
        self.store.create_proposal.side_effect = RuntimeError('connection lost')

        with self.assertRaises(InternalServerError):
            self.service.create_proposal(_proposal_data(), 'user-1')

        self.logger.error.assert_called_once()


class TestGetAllProposals(LifecycleTestCase):
    """Tests for get_all_proposals."""

    def test_returns_proposals_with_count(self):
        """Proposals are returned together with their count."""
        proposals = [SimpleNamespace(id='1'), SimpleNamespace(id='2')]
        self.store.find_proposals.return_value = proposals

        result = self.service.get_all_proposals('user-1')

        self.assertEqual(result, {'proposals': proposals, 'count': 2})
        self.store.find_proposals.assert_called_once_with('user-1')

    def test_empty_list_is_not_a_failure(self):
        """No proposals gives an empty result."""
        self.store.find_proposals.return_value = []

        result = self.service.get_all_proposals('user-1')

        self.assertEqual(result, {'proposals': [], 'count': 0})
        self.logger.error.assert_not_called()

    def test_missing_user_id_raises_not_found(self):
        """Absent actor identity fails before touching the store."""
        for user_id in (None, ''):
            with self.assertRaises(NotFoundError):
                self.service.get_all_proposals(user_id)

        self.store.find_proposals.assert_not_called()

    def test_absent_result_raises_internal_error(self):
        """A store returning None is treated as a fault."""
        self.store.find_proposals.return_value = None

        with self.assertRaises(InternalServerError):
            self.service.get_all_proposals('user-1')

        self.logger.error.assert_called_once()

    def test_store_failure_logs_and_raises(self):
        """A failing query is logged once and re-raised."""
        self.store.find_proposals.side_effect = RuntimeError('Error')

        with self.assertRaises(InternalServerError):
            self.service.get_all_proposals('user-1')

        self.logger.error.assert_called_once()


class TestGetProposalById(LifecycleTestCase):
    """Tests for get_proposal_by_id."""

    def test_returns_proposal(self):
        """Existing proposal is returned."""
        proposal = SimpleNamespace(id='proposal-1', title='Proposal')
        self.store.find_proposal.return_value = proposal

        result = self.service.get_proposal_by_id('proposal-1')

        self.assertIs(result, proposal)
        self.store.find_proposal.assert_called_once_with('proposal-1')

    def test_missing_proposal_raises_not_found_directly(self):
        """A miss is raised as NotFoundError and logged as a warning."""
        self.store.find_proposal.return_value = None

        with self.assertRaises(NotFoundError) as ctx:
            self.service.get_proposal_by_id('proposal-1')

        self.assertNotIsInstance(ctx.exception, InternalServerError)
        self.assertEqual(ctx.exception.message, 'Proposal with ID proposal-1 not found')
        self.logger.warning.assert_called_once()
        self.logger.error.assert_not_called()

    def test_store_failure_logs_and_raises(self):
        """A failing query is logged once and re-raised."""
        self.store.find_proposal.side_effect = RuntimeError('Error')

        with self.assertRaises(InternalServerError):
            self.service.get_proposal_by_id('proposal-1')

        self.logger.error.assert_called_once()


class TestUpdateProposal(LifecycleTestCase):
    """Tests for update_proposal."""

    def test_update_forwards_patch(self):
        """Patch is forwarded verbatim and the message names the id."""
        patch_data = {'title': 'Updated Title'}
        updated = SimpleNamespace(id='proposal-1', title='Updated Title')
        self.store.update_proposal.return_value = updated

        result = self.service.update_proposal('proposal-1', patch_data)

        self.assertEqual(result, {
            'message': 'Proposal with ID proposal-1 has been updated',
            'proposal': updated,
        })
        self.store.update_proposal.assert_called_once_with('proposal-1', patch_data)

    def test_missing_id_raises_not_found(self):
        """Absent id fails before touching the store."""
        with self.assertRaises(NotFoundError):
            self.service.update_proposal(None, {})

        self.store.update_proposal.assert_not_called()

    def test_store_failure_logs_and_raises(self):
        """A failing update is logged once and re-raised."""
        self.store.update_proposal.side_effect = RuntimeError('Error')

        with self.assertRaises(InternalServerError):
            self.service.update_proposal('proposal-1', {})

        self.logger.error.assert_called_once()


class TestDeleteProposal(LifecycleTestCase):
    """Tests for delete_proposal."""

    def test_delete_returns_message(self):
        """Delete issues one store call and returns a message."""
        self.store.delete_proposal.return_value = SimpleNamespace(id='proposal-1')

        result = self.service.delete_proposal('proposal-1')

        self.assertEqual(result, {'message': 'Proposal with ID proposal-1 has been deleted'})
        self.store.delete_proposal.assert_called_once_with('proposal-1')

    def test_missing_id_raises_not_found(self):
        """Absent id fails before touching the store."""
        with self.assertRaises(NotFoundError):
            self.service.delete_proposal(None)

        self.store.delete_proposal.assert_not_called()

    def test_second_delete_raises_internal_error(self):
        """Deleting an already deleted id surfaces as InternalServerError."""
        self.store.delete_proposal.side_effect = [
            SimpleNamespace(id='proposal-1'), LookupError('Record to delete does not exist')
        ]

        self.service.delete_proposal('proposal-1')
        with self.assertRaises(InternalServerError):
            self.service.delete_proposal('proposal-1')

        self.assertEqual(self.store.delete_proposal.call_count, 2)
        self.logger.error.assert_called_once()


if __name__ == '__main__':
    unittest.main()
