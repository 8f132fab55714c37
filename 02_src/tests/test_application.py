"""Tests for Application."""

import json

import pytest

from carebot.app import Application
from carebot.conversation import DefinitionError
from carebot.models import ButtonsMessage


@pytest.fixture
async def app(mock_messenger, mock_llm):
    application = Application(db_path=":memory:", messenger=mock_messenger, llm_provider=mock_llm)
    await application.start()
    yield application
    await application.stop()


class TestApplicationStart:
    """Tests for Application.start()."""

    @pytest.mark.asyncio
    async def test_start_initializes_components(self, app):
        assert app._storage is not None
        assert app._event_bus is not None
        assert app._tracker is not None
        assert app._definition.initial_state == "greeting"
        assert app._output_router is not None
        assert app._dialogue_agent is not None
        assert app._sweeper.running

    @pytest.mark.asyncio
    async def test_components_share_dependencies(self, app):
        assert app._tracker._event_bus is app._event_bus
        assert app._tracker._storage is app._storage
        assert app._dialogue_agent._resolver is app.resolver
        assert app.resolver._forms is app.forms

    @pytest.mark.asyncio
    async def test_broken_definition_aborts_start(self, tmp_path, mock_messenger):
        path = tmp_path / "tree.json"
        path.write_text(json.dumps({"initial_state": "x", "states": {}}), encoding="utf-8")
        application = Application(db_path=":memory:", tree_path=path, messenger=mock_messenger)

        with pytest.raises(DefinitionError):
            await application.start()
        await application.stop()

    @pytest.mark.asyncio
    async def test_runs_without_llm_key(self, monkeypatch, mock_messenger):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        application = Application(db_path=":memory:", messenger=mock_messenger)

        await application.start()
        try:
            assert application._llm is None
            message = await application.dialogue_agent.handle_message("room1", "konsultasi")
            assert message.body.startswith("Silakan tulis")
        finally:
            await application.stop()

    def test_invalid_numeric_setting(self, monkeypatch):
        monkeypatch.setenv("FORM_TIMEOUT_MINUTES", "sepuluh")

        with pytest.raises(ValueError, match="FORM_TIMEOUT_MINUTES"):
            Application(db_path=":memory:")

    def test_properties_before_start(self):
        application = Application(db_path=":memory:")

        with pytest.raises(RuntimeError, match="not started"):
            application.resolver


class TestApplicationDelivery:
    """Tests for the full inbound-to-delivery path."""

    @pytest.mark.asyncio
    async def test_reply_is_delivered(self, app, mock_messenger):
        reply = await app.dialogue_agent.handle_message("room1", "halo")

        assert isinstance(reply, ButtonsMessage)
        mock_messenger.send.assert_awaited_once_with("room1", reply)


class TestApplicationReset:
    """Tests for Application.reset()."""

    @pytest.mark.asyncio
    async def test_reset_clears_data_and_positions(self, app):
        await app.dialogue_agent.handle_message("room1", "SilverStream")
        assert app.resolver.current_state("room1") == "silverstream_menu"

        await app.reset()

        assert await app.storage.get_transcript("room1") == []
        assert app.resolver.current_state("room1") == "greeting"
        assert app._sweeper.running

    @pytest.mark.asyncio
    async def test_stop_closes_storage(self, mock_messenger):
        application = Application(db_path=":memory:", messenger=mock_messenger)
        await application.start()

        await application.stop()

        assert application._storage._conn is None
        mock_messenger.aclose.assert_not_awaited()
