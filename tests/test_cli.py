"""Tests for simulation settings and the terminal driver."""

import io

import pytest

from torus_life import cli
from torus_life.cli import load_grid, main, render_frame, run
from torus_life.config import SimulationConfig
from torus_life.core.grid import Grid
from torus_life.core.rules import LifeRule, standard_rule, terminal_neighbors
from torus_life.core.world import World
from torus_life.formats.plaintext import read_plaintext, save_plaintext

SEPARATOR = '-' * 9


class TestSimulationConfig:
    """Test settings validation."""

    def test_defaults(self):
        config = SimulationConfig()
        assert (config.width, config.height) == (50, 50)
        assert config.topology == 'torus'
        assert config.rule_fn() is standard_rule

    @pytest.mark.parametrize("kwargs,message", [
        ({'width': 0}, "dimensions"),
        ({'height': -3}, "dimensions"),
        ({'density': 1.5}, "density"),
        ({'delay': -1.0}, "delay"),
        ({'generations': -1}, "generations"),
        ({'topology': 'klein'}, "topology"),
        ({'rule': 'B3S23x'}, "Invalid rulestring"),
        ({'live_char': 'OO'}, "single characters"),
    ])
    def test_invalid_settings(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            SimulationConfig(**kwargs)

    def test_custom_rule_and_topology(self):
        config = SimulationConfig(rule='B36/S23', topology='terminal')
        assert config.rule_fn() == LifeRule.from_rulestring('B36/S23')
        assert config.neighbor_counter() is terminal_neighbors


class TestRendering:
    """Test frame rendering."""

    def test_render_frame(self):
        world = World(Grid.parse("O.\n.O"))
        assert render_frame(world) == f"O \n O\n{SEPARATOR}"

    def test_render_frame_custom_chars(self):
        world = World(Grid.parse("O.\n.O"))
        assert render_frame(world, '#', '.') == f"#.\n.#\n{SEPARATOR}"

    def test_separator_follows_wide_grid(self):
        world = World(Grid.create_dead(12, 1))
        assert render_frame(world).splitlines()[-1] == '-' * 12


class TestLoadGrid:
    """Test choosing the starting grid."""

    def test_random_grid_is_seeded(self):
        config = SimulationConfig(width=10, height=6, seed=5)
        assert load_grid(config) == load_grid(config)

    def test_named_pattern_is_centered(self):
        grid = load_grid(SimulationConfig(width=9, height=9), pattern='block')
        assert grid.range((3, 3), (5, 5)) == Grid.parse("OO\nOO")

    def test_file_overrides_dimensions(self, tmp_path):
        path = tmp_path / "toad.cells"
        save_plaintext(path, Grid.parse(".OOO\nOOO."), name="Toad")

        grid = load_grid(SimulationConfig(width=20, height=20), path=str(path), rotate=1)
        assert (grid.width, grid.height) == (2, 4)


class TestRun:
    """Test the animation loop."""

    def test_frame_per_generation(self):
        world = World(Grid.parse("...\nOOO\n..."))
        out = io.StringIO()

        result = run(world, SimulationConfig(generations=3, delay=0), out)

        assert result.generation == 3
        assert out.getvalue().count(SEPARATOR) == 4

    def test_immutable_run_returns_new_world(self):
        world = World(Grid.parse("...\nOOO\n..."))
        result = run(world, SimulationConfig(generations=1, delay=0, mutate=False), io.StringIO())

        assert result is not world
        assert world.generation == 0
        assert result.generation == 1

    def test_keyboard_interrupt_stops_cleanly(self, monkeypatch):
        def interrupt(seconds):
            raise KeyboardInterrupt

        monkeypatch.setattr(cli.time, "sleep", interrupt)
        world = World(Grid.parse("...\nOOO\n..."))

        result = run(world, SimulationConfig(delay=0.5), io.StringIO())
        assert result.generation == 1


class TestMain:
    """Test the command line entry point."""

    def test_pattern_run(self):
        out = io.StringIO()
        code = main(["--pattern", "glider", "--width", "8", "--height", "8",
                     "--generations", "2", "--delay", "0"], out=out)

        assert code == 0
        assert out.getvalue().count(SEPARATOR) == 3

    def test_dump_final_grid(self, tmp_path):
        dump = tmp_path / "final.cells"
        code = main(["--pattern", "blinker", "--width", "5", "--height", "5",
                     "--generations", "1", "--delay", "0", "--dump", str(dump)],
                    out=io.StringIO())

        assert code == 0
        document = read_plaintext(dump)
        assert document.name == "generation 1"
        assert [document.grid.is_live(2, y) for y in range(1, 4)] == [True, True, True]
        assert document.grid.count_live() == 3

    def test_immutable_matches_mutable(self, tmp_path):
        args = ["--pattern", "r-pentomino", "--width", "16", "--height", "16",
                "--generations", "10", "--delay", "0"]
        mutable, immutable = tmp_path / "a.cells", tmp_path / "b.cells"

        main(args + ["--dump", str(mutable)], out=io.StringIO())
        main(args + ["--immutable", "--dump", str(immutable)], out=io.StringIO())

        assert read_plaintext(mutable).grid == read_plaintext(immutable).grid

    def test_unwritable_dump_path(self, tmp_path):
        dump = tmp_path / "missing-dir" / "final.cells"
        code = main(["--pattern", "block", "--width", "4", "--height", "4",
                     "--generations", "0", "--delay", "0", "--dump", str(dump)],
                    out=io.StringIO())

        assert code == 1
        assert not dump.exists()

    def test_bad_pattern_file(self, tmp_path):
        path = tmp_path / "bad.cells"
        path.write_text("!Name: Broken\nOzO\n", encoding='utf-8')

        assert main(["--file", str(path), "--generations", "0", "--delay", "0"],
                    out=io.StringIO()) == 1

    def test_missing_pattern_file(self, tmp_path):
        assert main(["--file", str(tmp_path / "nope.cells"), "--generations", "0"],
                    out=io.StringIO()) == 1

    @pytest.mark.parametrize("argv", [
        ["--width", "0"],
        ["--rule", "nonsense"],
        ["--pattern", "beacon", "--width", "3", "--height", "3"],
        ["--pattern", "glider", "--file", "x.cells"],
    ])
    def test_invalid_arguments_exit_2(self, argv):
        with pytest.raises(SystemExit) as excinfo:
            main(argv + ["--generations", "0", "--delay", "0"], out=io.StringIO())
        assert excinfo.value.code == 2
