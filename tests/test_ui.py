"""Smoke tests for the UI module (no display required)."""

from __future__ import annotations

from dataclasses import replace

import pygame
import pytest

from rescomp.simulation.config import SimulationConfig, WorldConfig
from rescomp.simulation.engine import SimulationEngine
from rescomp.ui.pygame_client import (
    ConfigEditor,
    PygameRenderer,
    agent_colour,
    cell_colour,
    edit_config_key,
)


def test_pygame_renderer_importable() -> None:
    """PygameRenderer class is importable without initialising pygame."""
    assert PygameRenderer is not None


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from rescomp.__main__ import main

    assert callable(main)


def test_cell_colour_endpoints() -> None:
    assert cell_colour(0.0) == (30, 80, 120)
    assert cell_colour(1.0) == (110, 220, 60)
    assert cell_colour(2.0) == cell_colour(1.0)


def test_agent_colour_fades_to_red() -> None:
    assert agent_colour(10, 10) == (255, 255, 255)
    assert agent_colour(0, 10) == (255, 0, 0)
    assert agent_colour(5, 10) == (255, 127, 127)


class TestConfigEditor:
    """Tests for the keyboard World Config editor."""

    @pytest.fixture
    def editor(self) -> ConfigEditor:
        return ConfigEditor(draft=WorldConfig())

    def test_fields_follow_world_config(self, editor: ConfigEditor) -> None:
        assert editor.FIELDS[0] == "width"
        assert editor.FIELDS[-1] == "agent_hp"
        assert editor.selected_field == "width"

    def test_right_increments_selected_field(self, editor: ConfigEditor) -> None:
        assert edit_config_key(editor, pygame.K_RIGHT)
        assert editor.draft.width == 21

    def test_shift_steps_by_ten(self, editor: ConfigEditor) -> None:
        edit_config_key(editor, pygame.K_DOWN)
        edit_config_key(editor, pygame.K_RIGHT, shift=True)
        assert editor.selected_field == "height"
        assert editor.draft.height == 30
        assert editor.draft.width == 20

    def test_left_floors_at_zero(self, editor: ConfigEditor) -> None:
        editor.select(2)
        assert editor.selected_field == "min_resource"
        edit_config_key(editor, pygame.K_LEFT, shift=True)
        assert editor.draft.min_resource == 0

    def test_up_wraps_to_last_field(self, editor: ConfigEditor) -> None:
        edit_config_key(editor, pygame.K_UP)
        assert editor.selected_field == "agent_hp"
        edit_config_key(editor, pygame.K_DOWN)
        assert editor.selected_field == "width"

    def test_other_keys_are_not_consumed(self, editor: ConfigEditor) -> None:
        assert not edit_config_key(editor, pygame.K_r)
        assert not edit_config_key(editor, pygame.K_SPACE)
        assert editor.draft == WorldConfig()
        assert editor.selected == 0

    def test_lines_mark_selection(self, editor: ConfigEditor) -> None:
        editor.select(1)
        lines = editor.lines()
        assert len(lines) == len(editor.FIELDS)
        assert lines[0] == "  width: 20"
        assert lines[1] == "> height: 20"

    def test_edits_leave_source_config_alone(self) -> None:
        source = WorldConfig()
        editor = ConfigEditor(draft=replace(source))
        edit_config_key(editor, pygame.K_RIGHT)
        assert source.width == 20
        assert editor.draft.width == 21


class TestRendererReset:
    """Tests for resetting the world from the edited config, windowless."""

    @pytest.fixture
    def renderer(self, monkeypatch: pytest.MonkeyPatch) -> PygameRenderer:
        monkeypatch.setattr(PygameRenderer, "_resize", lambda self: None)
        config = SimulationConfig(seed=3, world=WorldConfig(width=8, height=6))
        engine = SimulationEngine(config=config)
        renderer = PygameRenderer.__new__(PygameRenderer)
        renderer.engine = engine
        renderer.editor = ConfigEditor(draft=replace(config.world))
        renderer.config_error = None
        renderer._tick_accumulator = 0.0
        return renderer

    def test_reset_applies_draft(self, renderer: PygameRenderer) -> None:
        renderer.engine.run(4)
        renderer.editor.draft = replace(renderer.editor.draft, width=5, height=4)
        renderer._handle_key(pygame.K_r)
        assert renderer.engine.world.size == (5, 4)
        assert renderer.engine.tick == 0
        assert renderer.engine.config.world.width == 5
        assert renderer.config_error is None

    def test_invalid_draft_reports_error(self, renderer: PygameRenderer) -> None:
        renderer.engine.run(2)
        world = renderer.engine.world
        renderer.editor.draft = replace(renderer.editor.draft, width=0)
        renderer._handle_key(pygame.K_r)
        assert renderer.config_error is not None
        assert "width" in renderer.config_error
        assert renderer.engine.world is world
        assert renderer.engine.tick == 2

    def test_error_clears_after_valid_reset(self, renderer: PygameRenderer) -> None:
        renderer.editor.draft = replace(renderer.editor.draft, agent_hp=0)
        renderer._handle_key(pygame.K_r)
        assert renderer.config_error is not None
        renderer.editor.draft = replace(renderer.editor.draft, agent_hp=3)
        renderer._handle_key(pygame.K_r)
        assert renderer.config_error is None
        assert renderer.engine.config.world.agent_hp == 3

    def test_editing_keys_do_not_reset(self, renderer: PygameRenderer) -> None:
        world = renderer.engine.world
        renderer._handle_key(pygame.K_RIGHT, shift=True)
        assert renderer.editor.draft.width == 18
        assert renderer.engine.world is world
        assert renderer.engine.config.world.width == 8
