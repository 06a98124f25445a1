"""
Tests for the hook registry and the H5P mods
"""
import logging
import sys
import time
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from h5pmods.config import ModsConfig
from h5pmods.hooks import (
    H5PHook,
    HookRegistry,
    alter_parameters,
    alter_scripts,
    alter_semantics,
    alter_styles,
    alter_user_result,
    embed_access,
    register_mods,
)
from h5pmods.hooks.mods import SCORE_TRACKING_SCRIPT
from h5pmods.semantics import dump_semantics, find_semantics_path, load_semantics


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def registry() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def config() -> ModsConfig:
    return ModsConfig(
        collage_label="Custom Collage",
        score_script_path="https://cdn.example.org/score.js",
        score_script_version="?ver=2.0.0",
        embed_content_ids=frozenset({"1", "42"}),
    )


@pytest.fixture
def collage_semantics() -> list:
    return load_semantics([
        {"name": "collage", "type": "group", "label": "Collage", "fields": [
            {"name": "template", "type": "text", "default": "2-1"},
        ]},
    ])


@pytest.fixture
def multichoice_semantics() -> list:
    return load_semantics([
        {"name": "question", "type": "text", "label": "Question"},
        {"name": "behaviour", "type": "group", "fields": [
            {"name": "randomAnswers", "type": "boolean", "default": True},
        ]},
    ])


# ============================================================================
# HookRegistry
# ============================================================================

class TestHookRegistry:
    """Tests for registration and dispatch"""

    def test_priority_then_registration_order(self, registry):
        calls = []
        registry.add_action("test_hook", lambda: calls.append("late"), priority=20, accepted_args=0)
        registry.add_action("test_hook", lambda: calls.append("first"), priority=10, accepted_args=0)
        registry.add_action("test_hook", lambda: calls.append("second"), priority=10, accepted_args=0)
        registry.add_action("test_hook", lambda: calls.append("early"), priority=5, accepted_args=0)

        registry.do_action("test_hook")

        assert calls == ["early", "first", "second", "late"]

    def test_accepted_args(self, registry):
        received = []
        registry.add_action("test_hook", lambda *args: received.append(args), accepted_args=2)

        registry.do_action("test_hook", "a", "b", "c")

        assert received == [("a", "b")]

    def test_enum_and_string_names_match(self, registry):
        calls = []
        registry.add_action(H5PHook.ALTER_LIBRARY_STYLES, lambda styles: calls.append(styles))

        registry.do_action("h5p_alter_library_styles", [])

        assert calls == [[]]
        assert registry.has_hook("h5p_alter_library_styles")

    def test_apply_filters_threads_value(self, registry):
        registry.add_filter("count", lambda value: value + 1)
        registry.add_filter("count", lambda value, step: value * step, priority=20, accepted_args=2)

        assert registry.apply_filters("count", 1, 10) == 20

    def test_apply_filters_without_callbacks(self, registry):
        assert registry.apply_filters("nothing", "value", 1) == "value"

    def test_do_action_without_callbacks(self, registry):
        registry.do_action("nothing", 1, 2)

    def test_remove_action(self, registry):
        def callback(value):
            raise AssertionError("removed callback was called")

        registry.add_action("test_hook", callback, priority=15)
        assert registry.has_hook("test_hook", callback)
        assert registry.remove_action("test_hook", callback) is False  # wrong priority
        assert registry.remove_action("test_hook", callback, priority=15) is True
        assert not registry.has_hook("test_hook")

        registry.do_action("test_hook", 1)

    def test_callback_errors_propagate(self, registry):
        def broken(value):
            raise RuntimeError("boom")

        registry.add_action("test_hook", broken)

        with pytest.raises(RuntimeError, match="boom"):
            registry.do_action("test_hook", 1)

    def test_negative_accepted_args(self, registry):
        with pytest.raises(ValueError):
            registry.add_action("test_hook", print, accepted_args=-1)


# ============================================================================
# Mods
# ============================================================================

class TestAlterSemantics:
    """Tests for alter_semantics"""

    def test_collage_before_1_0(self, collage_semantics):
        alter_semantics(collage_semantics, "H5P.Collage", 0, 3)
        assert collage_semantics[0].label == "Altered Label"

    def test_collage_label_from_config(self, collage_semantics, config):
        alter_semantics(collage_semantics, "H5P.Collage", 0, 3, config=config)
        assert collage_semantics[0].label == "Custom Collage"

    def test_collage_1_0_untouched(self, collage_semantics):
        alter_semantics(collage_semantics, "H5P.Collage", 1, 0)
        assert collage_semantics[0].label == "Collage"

    def test_multichoice_random_answers_off(self, multichoice_semantics):
        alter_semantics(multichoice_semantics, "H5P.MultiChoice", 1, 16)
        assert find_semantics_path("behaviour/randomAnswers", multichoice_semantics).default is False
        assert dump_semantics(multichoice_semantics)[1]["fields"][0]["default"] is False

    def test_other_library_untouched(self, multichoice_semantics):
        before = dump_semantics(multichoice_semantics)
        alter_semantics(multichoice_semantics, "H5P.TrueFalse", 1, 8)
        assert dump_semantics(multichoice_semantics) == before

    def test_missing_field_ignored(self):
        semantics = load_semantics([{"name": "other", "type": "text"}])
        alter_semantics(semantics, "H5P.Collage", 0, 1)
        alter_semantics(semantics, "H5P.MultiChoice", 1, 16)
        assert dump_semantics(semantics) == [{"name": "other", "type": "text"}]

    def test_raw_dicts_logged(self, caplog):
        semantics = [{"name": "collage", "type": "group", "label": "Collage", "fields": []}]

        with caplog.at_level(logging.WARNING, logger="h5pmods.hooks.mods"):
            alter_semantics(semantics, "H5P.Collage", 0, 3)

        assert semantics[0]["label"] == "Collage"
        assert "no 'collage' field" in caplog.text


class TestAlterParameters:
    """Tests for alter_parameters"""

    def test_multichoice_question(self, monkeypatch):
        monkeypatch.setattr(time, "time", lambda: 1700000000.5)
        parameters = {"question": "<p>What is 2 + 2?</p>"}

        alter_parameters(parameters, "H5P.MultiChoice", 1, 16)

        assert parameters["question"] == "<p>What is 2 + 2?</p><p>Generated at 1700000000.</p>"

    def test_other_library(self):
        parameters = {"question": "<p>Q</p>"}
        alter_parameters(parameters, "H5P.Blanks", 1, 14)
        assert parameters == {"question": "<p>Q</p>"}


class TestAlterAssets:
    """Tests for alter_scripts / alter_styles"""

    def test_drag_question_gets_score_tracking(self):
        scripts = [{"path": "/libraries/H5P.DragQuestion-1.14/dist/h5p-dragquestion.js", "version": "?ver=1.14.2"}]

        alter_scripts(scripts, {"H5P.DragQuestion": {"majorVersion": 1, "minorVersion": 14}}, "iframe")

        assert scripts[-1] == {"path": "/score-tracking.js", "version": "?ver=1.2.3"}
        assert len(scripts) == 2

    def test_script_from_config(self, config):
        scripts = []
        alter_scripts(scripts, {"H5P.DragQuestion": {}}, "div", config=config)
        assert scripts == [{"path": "https://cdn.example.org/score.js", "version": "?ver=2.0.0"}]

    def test_other_libraries_no_script(self):
        scripts = []
        alter_scripts(scripts, {"H5P.MultiChoice": {}}, "div")
        assert scripts == []

    def test_styles_always_added(self):
        styles = []
        alter_styles(styles, {}, "editor")
        assert styles == [{"path": "http://mydomain.org/custom-h5p-styling.css", "version": "?ver=1.3.7"}]

    def test_score_tracking_script_shipped(self):
        source = SCORE_TRACKING_SCRIPT.read_text(encoding="utf-8")
        assert "H5P.externalDispatcher.on('xAPI'" in source
        assert "result.score" in source


class TestEmbedAccess:
    """Tests for embed_access"""

    def test_content_1_always_embeddable(self):
        assert embed_access(False, "1") is True
        assert embed_access(False, 1) is True

    def test_other_content_keeps_access(self):
        assert embed_access(False, "2") is False
        assert embed_access(True, "2") is True

    def test_ids_from_config(self, config):
        assert embed_access(False, 42, config=config) is True


class TestAlterUserResult:
    """Tests for alter_user_result"""

    def test_score_capped_at_max(self):
        data = {"score": 12, "max_score": 10, "opened": 1700000000}
        alter_user_result(data, 5, 1, 3)
        assert data == {"score": 10, "max_score": 10, "opened": 1700000000}

    def test_negative_score(self):
        data = {"score": -2, "max_score": 10}
        alter_user_result(data, 5, 1, 3)
        assert data["score"] == 0

    def test_valid_score_untouched(self):
        data = {"score": 7, "max_score": 10}
        alter_user_result(data, 5, 1, 3)
        assert data["score"] == 7

    def test_incomplete_result_untouched(self):
        data = {"score": 7}
        alter_user_result(data, 5, 1, 3)
        assert data == {"score": 7}

    def test_non_numeric_scores_untouched(self):
        for data in ({"score": None, "max_score": 5}, {"score": "12", "max_score": 10},
                     {"score": 3, "max_score": None}, {"score": True, "max_score": 10}):
            before = dict(data)
            alter_user_result(data, 5, 1, 3)
            assert data == before

    def test_non_numeric_score_does_not_stop_dispatch(self, registry):
        register_mods(registry)
        data = {"score": None, "max_score": 5}

        registry.do_action(H5PHook.ALTER_USER_RESULT, data, 1, 1, 1)

        assert data == {"score": None, "max_score": 5}


class TestRegisterMods:
    """Tests for the full hook wiring"""

    def test_all_hooks_registered(self, registry):
        register_mods(registry)
        for hook in H5PHook:
            assert registry.has_hook(hook), hook

    def test_dispatch_through_registry(self, registry, config, collage_semantics):
        register_mods(registry, config)

        registry.do_action(H5PHook.ALTER_LIBRARY_SEMANTICS, collage_semantics, "H5P.Collage", 0, 3)
        assert collage_semantics[0].label == "Custom Collage"

        scripts, styles = [], []
        libraries = {"H5P.DragQuestion": {}}
        registry.do_action(H5PHook.ALTER_LIBRARY_SCRIPTS, scripts, libraries, "iframe")
        registry.do_action(H5PHook.ALTER_LIBRARY_STYLES, styles, libraries, "iframe")
        assert scripts[0]["path"] == "https://cdn.example.org/score.js"
        assert len(styles) == 1

        assert registry.apply_filters(H5PHook.EMBED_ACCESS, False, "42") is True
        assert registry.apply_filters(H5PHook.EMBED_ACCESS, False, "7") is False

        result = {"score": 11, "max_score": 10}
        registry.do_action(H5PHook.ALTER_USER_RESULT, result, 1, 42, 3)
        assert result["score"] == 10

    def test_later_filter_can_override(self, registry):
        register_mods(registry)
        registry.add_filter(H5PHook.EMBED_ACCESS, lambda access, content_id: False, priority=20, accepted_args=2)

        assert registry.apply_filters(H5PHook.EMBED_ACCESS, True, "1") is False
