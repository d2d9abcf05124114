"""
Tests for the program store port and its Supabase implementation.

These tests verify that:
1. The ProgramStore protocol defines the expected methods
2. SupabaseProgramStore issues the expected queries (MagicMock client)
3. Client failures surface as PersistenceError
4. The dependency providers wire the store and use case together
"""
import pytest
from unittest.mock import MagicMock, Mock, patch

from application.exceptions import PersistenceError
from infrastructure.db.program_store import DEFAULT_PROGRAMS_TABLE, SupabaseProgramStore

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit


def make_client(data):
    """MagicMock Supabase client whose query chain returns ``data``."""
    client = MagicMock()
    table = client.table.return_value
    table.select.return_value.eq.return_value.limit.return_value.execute.return_value = Mock(data=data)
    table.update.return_value.eq.return_value.execute.return_value = Mock(data=data)
    return client


class TestProgramStoreProtocol:
    """Test ProgramStore protocol definition."""

    def test_has_required_methods(self):
        """ProgramStore should define fetch and persist."""
        from application.ports import ProgramStore

        for method in ["fetch_program_by_id", "persist_weeks"]:
            assert hasattr(ProgramStore, method), f"Missing method: {method}"

    def test_implementations_have_required_methods(self):
        """Supabase store and fake share the protocol surface."""
        from tests.fakes import FakeProgramStore

        for impl in (SupabaseProgramStore, FakeProgramStore):
            assert callable(getattr(impl, "fetch_program_by_id"))
            assert callable(getattr(impl, "persist_weeks"))


class TestSupabaseProgramStore:
    """Tests for SupabaseProgramStore with a mocked client."""

    def test_instantiation(self):
        mock_client = Mock()
        store = SupabaseProgramStore(mock_client)
        assert store._client is mock_client
        assert store._table == DEFAULT_PROGRAMS_TABLE

    def test_fetch_found(self):
        client = make_client([{"id": "p1", "name": "Block"}])
        store = SupabaseProgramStore(client)

        assert store.fetch_program_by_id("p1") == {"id": "p1", "name": "Block"}
        client.table.assert_called_with("workout_programs")
        client.table.return_value.select.assert_called_with("*")
        client.table.return_value.select.return_value.eq.assert_called_with("id", "p1")

    def test_fetch_missing(self):
        store = SupabaseProgramStore(make_client([]))
        assert store.fetch_program_by_id("nope") is None

    def test_fetch_failure_wrapped(self):
        client = MagicMock()
        client.table.side_effect = RuntimeError("connection reset")
        store = SupabaseProgramStore(client)

        with pytest.raises(PersistenceError, match="connection reset") as exc_info:
            store.fetch_program_by_id("p1")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_persist_updates_weeks_only(self):
        client = make_client([{"id": "p1", "weeks": []}])
        store = SupabaseProgramStore(client, table="custom_programs")
        weeks = [{"weekNumber": 1, "days": []}]

        assert store.persist_weeks("p1", weeks) == {"id": "p1", "weeks": []}
        client.table.assert_called_with("custom_programs")
        update_data = client.table.return_value.update.call_args[0][0]
        assert set(update_data) == {"weeks", "updated_at"}
        assert update_data["weeks"] == weeks
        client.table.return_value.update.return_value.eq.assert_called_with("id", "p1")

    def test_persist_missing_program(self):
        store = SupabaseProgramStore(make_client([]))
        assert store.persist_weeks("nope", []) is None

    def test_persist_failure_wrapped(self):
        client = make_client([])
        client.table.return_value.update.return_value.eq.return_value.execute.side_effect = (
            RuntimeError("permission denied")
        )
        store = SupabaseProgramStore(client)

        with pytest.raises(PersistenceError, match="permission denied"):
            store.persist_weeks("p1", [])


class TestDependencyProviders:
    """Tests for backend/deps.py."""

    @pytest.fixture(autouse=True)
    def clear_caches(self):
        from backend import deps
        from backend.settings import get_settings

        get_settings.cache_clear()
        deps.get_supabase_client.cache_clear()
        yield
        get_settings.cache_clear()
        deps.get_supabase_client.cache_clear()

    def test_program_store_requires_database(self, monkeypatch):
        from backend import deps

        monkeypatch.setattr(deps, "get_supabase_client", lambda: None)
        with pytest.raises(PersistenceError, match="Database not available"):
            deps.get_program_store()

    def test_program_store_with_client(self):
        from backend import deps

        client = Mock()
        store = deps.get_program_store(client)
        assert isinstance(store, SupabaseProgramStore)
        assert store._client is client

    def test_supabase_client_none_when_unconfigured(self, monkeypatch):
        from backend import deps
        from backend.settings import Settings

        monkeypatch.setattr(deps, "get_settings", lambda: Settings(_env_file=None, supabase_url=None))
        with patch.object(deps, "create_client") as create:
            assert deps.get_supabase_client() is None
        create.assert_not_called()

    def test_supabase_client_created_from_settings(self, monkeypatch):
        from backend import deps
        from backend.settings import Settings

        settings = Settings(
            _env_file=None,
            supabase_url="https://example.supabase.co",
            supabase_service_role_key="service-key",
        )
        monkeypatch.setattr(deps, "get_settings", lambda: settings)
        with patch.object(deps, "create_client", return_value="client") as create:
            assert deps.get_supabase_client() == "client"
        create.assert_called_once_with("https://example.supabase.co", "service-key")

    def test_use_case_with_injected_store(self):
        from backend import deps
        from application.use_cases import ApplyModificationUseCase
        from tests.fakes import FakeProgramStore

        store = FakeProgramStore()
        use_case = deps.get_apply_modification_use_case(store)
        assert isinstance(use_case, ApplyModificationUseCase)
        assert use_case._program_store is store
