"""Tests for conversation definition loading and rendering."""

import json

import pytest

from carebot.conversation import DefinitionError, build_definition, load_definition, render_state
from carebot.conversation.definition import DEFAULT_AI_CONTEXT, ai_context_of
from carebot.models import ButtonsMessage, ConversationState, ListMessage, TextMessage


class TestBuildDefinition:
    """Tests for build_definition() validation."""

    def test_valid_definition(self, minimal_raw_definition):
        """A consistent document builds with normalized transition keys."""
        definition = build_definition(minimal_raw_definition)

        assert definition.initial_state == "start"
        assert definition.get_state("start").transitions == {"alpha": "alpha", "beta": "beta"}
        assert definition.get_state("beta").end_conversation is True

    def test_builtin_keywords_route_to_initial(self, minimal_raw_definition):
        """'menu' and 'bantuan' always exist and lead to the initial state."""
        definition = build_definition(minimal_raw_definition)

        assert definition.keywords["menu"] == "start"
        assert definition.keywords["bantuan"] == "start"
        assert definition.keywords["halo"] == "start"

    def test_document_keywords_override_builtins(self, minimal_raw_definition):
        minimal_raw_definition["keywords"]["menu"] = "alpha"

        definition = build_definition(minimal_raw_definition)

        assert definition.keywords["menu"] == "alpha"

    def test_missing_initial_state(self, minimal_raw_definition):
        minimal_raw_definition["initial_state"] = "nowhere"

        with pytest.raises(DefinitionError, match="initial_state 'nowhere'"):
            build_definition(minimal_raw_definition)

    def test_dangling_transition(self, minimal_raw_definition):
        """Transitions must point at a state or a reserved target."""
        minimal_raw_definition["states"]["alpha"]["transitions"]["x"] = "ghost"

        with pytest.raises(DefinitionError, match="ghost"):
            build_definition(minimal_raw_definition)

    def test_reserved_and_extra_targets_accepted(self, minimal_raw_definition):
        """unknown_input, error and registered form tokens are valid targets."""
        transitions = minimal_raw_definition["states"]["alpha"]["transitions"]
        transitions["huh"] = "unknown_input"
        transitions["oops"] = "error"
        transitions["daftar"] = "form_signup"

        definition = build_definition(minimal_raw_definition, extra_targets=["form_signup"])

        assert definition.get_state("alpha").transitions["daftar"] == "form_signup"

    def test_dangling_fallback_and_keyword(self, minimal_raw_definition):
        """Every problem is reported at once."""
        minimal_raw_definition["states"]["alpha"]["fallback"] = "ghost_state"
        minimal_raw_definition["keywords"]["tolong"] = "ghost_keyword"

        with pytest.raises(DefinitionError) as exc_info:
            build_definition(minimal_raw_definition)

        problems = " ".join(exc_info.value.problems)
        assert "ghost_state" in problems
        assert "ghost_keyword" in problems

    def test_too_many_buttons(self, minimal_raw_definition):
        minimal_raw_definition["states"]["start"]["message"]["buttons"] = [
            {"id": str(i), "title": f"B{i}"} for i in range(4)
        ]

        with pytest.raises(DefinitionError, match="4 buttons"):
            build_definition(minimal_raw_definition)

    def test_unknown_state_type(self, minimal_raw_definition):
        minimal_raw_definition["states"]["alpha"]["type"] = "carousel"

        with pytest.raises(DefinitionError, match="unknown type 'carousel'"):
            build_definition(minimal_raw_definition)

    def test_missing_fallback_responses(self, minimal_raw_definition):
        del minimal_raw_definition["fallback_responses"]["error"]

        with pytest.raises(DefinitionError, match="fallback_responses.error"):
            build_definition(minimal_raw_definition)

    def test_states_must_be_an_object(self, minimal_raw_definition):
        minimal_raw_definition["states"] = ["start", "alpha"]

        with pytest.raises(DefinitionError, match="'states' must be an object"):
            build_definition(minimal_raw_definition)

    def test_non_string_targets_are_reported(self, minimal_raw_definition):
        minimal_raw_definition["states"]["alpha"]["transitions"]["lagi"] = ["start"]
        minimal_raw_definition["states"]["alpha"]["fallback"] = {"id": "start"}

        with pytest.raises(DefinitionError) as exc_info:
            build_definition(minimal_raw_definition)

        problems = exc_info.value.problems
        assert any("transition 'lagi'" in p for p in problems)
        assert any("state 'alpha': fallback" in p for p in problems)

    def test_transitions_must_be_an_object(self, minimal_raw_definition):
        minimal_raw_definition["states"]["alpha"]["transitions"] = ["kembali"]

        with pytest.raises(DefinitionError, match="transitions must be an object"):
            build_definition(minimal_raw_definition)


class TestLoadDefinition:
    """Tests for load_definition()."""

    def test_load_from_file(self, tmp_path, minimal_raw_definition):
        path = tmp_path / "tree.json"
        path.write_text(json.dumps(minimal_raw_definition), encoding="utf-8")

        definition = load_definition(path)

        assert definition.info()["total_states"] == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(DefinitionError, match="cannot read"):
            load_definition(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tree.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DefinitionError):
            load_definition(path)

    def test_shipped_definition_is_valid(self, definition):
        """The bundled conversation tree passes every integrity check."""
        assert definition.initial_state == "greeting"
        for state in definition.states.values():
            render_state(state)


class TestRenderState:
    """Tests for render_state()."""

    def test_text(self):
        state = ConversationState(id="t", type="text", message="Halo")

        assert render_state(state) == TextMessage(body="Halo")

    def test_buttons(self):
        state = ConversationState(
            id="b",
            type="interactive_button",
            message={"body": "Pilih", "buttons": [{"id": "x", "title": "X"}]},
        )

        message = render_state(state)

        assert isinstance(message, ButtonsMessage)
        assert message.buttons[0].title == "X"

    def test_list_default_button_label(self):
        state = ConversationState(
            id="l",
            type="interactive_list",
            message={
                "body": "Menu",
                "lists": {"sections": [{"title": "S", "rows": [{"id": "r", "title": "R"}]}]},
            },
        )

        message = render_state(state)

        assert isinstance(message, ListMessage)
        assert message.button_label == "Pilih"

    def test_list_row_title_too_long(self):
        state = ConversationState(
            id="l",
            type="interactive_list",
            message={
                "body": "Menu",
                "lists": {
                    "sections": [
                        {"title": "S", "rows": [{"id": "r", "title": "x" * 25}]}
                    ]
                },
            },
        )

        with pytest.raises(DefinitionError, match="row titles"):
            render_state(state)

    def test_list_too_many_rows(self):
        rows = [{"id": str(i), "title": f"R{i}"} for i in range(11)]
        state = ConversationState(
            id="l",
            type="interactive_list",
            message={"body": "Menu", "lists": {"sections": [{"title": "S", "rows": rows}]}},
        )

        with pytest.raises(DefinitionError, match="11 list items"):
            render_state(state)

    def test_malformed_button_payload(self):
        """A button without a title is a definition error, not a KeyError."""
        state = ConversationState(
            id="b",
            type="interactive_button",
            message={"body": "Pilih", "buttons": [{"id": "x"}]},
        )

        with pytest.raises(DefinitionError, match="malformed"):
            render_state(state)

    def test_ai_generated_renders_canned_text(self):
        state = ConversationState(
            id="ai",
            type="ai_generated",
            message={"context": "konteks", "text": "Tulis pertanyaanmu"},
        )

        assert render_state(state) == TextMessage(body="Tulis pertanyaanmu")
        assert ai_context_of(state) == "konteks"

    def test_ai_context_only_for_ai_states(self):
        state = ConversationState(id="t", type="text", message="Halo")

        assert ai_context_of(state) is None

    def test_ai_context_defaults_when_missing(self):
        state = ConversationState(id="ai", type="ai_generated", message={"text": "Canned"})

        assert ai_context_of(state) == DEFAULT_AI_CONTEXT
