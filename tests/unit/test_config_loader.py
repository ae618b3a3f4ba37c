"""
Unit tests for configuration loading.
"""

from pathlib import Path

import pytest

from statcomp.config import loader
from statcomp.config.loader import (
    load_constants,
    get_section,
    clear_cache,
)


class TestLoadConstants:
    """Tests for constants loading."""

    def test_loads_valid_constants(self):
        """Loads constants from config file."""
        clear_cache()
        constants = load_constants()

        assert isinstance(constants, dict)
        assert len(constants) > 0

    def test_has_required_sections(self):
        """Constants have all required sections."""
        clear_cache()
        constants = load_constants()

        for section in ['root_finding', 'estimation', 'sampling', 'scenario']:
            assert section in constants, f"Missing section: {section}"

    def test_caches_constants(self):
        """Caches constants after first load."""
        clear_cache()
        constants1 = load_constants()
        constants2 = load_constants()

        assert constants1 is constants2

    def test_clear_cache_reloads(self):
        """Clearing the cache forces a fresh load."""
        clear_cache()
        constants1 = load_constants()
        clear_cache()
        constants2 = load_constants()

        assert constants1 is not constants2
        assert constants1 == constants2

    def test_sensible_defaults(self):
        """Default values are usable by the algorithms."""
        clear_cache()
        constants = load_constants()

        assert constants['root_finding']['max_iter'] > 0
        assert 0 < constants['estimation']['confidence_level'] < 1
        assert constants['sampling']['iterations'] > 0
        assert constants['sampling']['proposal_scale'] > 0

    def test_scenario_bracket(self):
        """Scenario bracket is ordered and contains the Newton start."""
        clear_cache()
        frechet = load_constants()['scenario']['frechet']
        low, high = frechet['bracket']

        assert low < frechet['newton_start'] < high


class TestPackagedConfig:
    """Tests for the constants file shipped with the package."""

    def test_config_dir_is_inside_package(self):
        assert loader.CONFIG_DIR == Path(loader.__file__).parent
        assert (loader.CONFIG_DIR / "constants.yaml").is_file()


class TestGetSection:
    """Tests for section lookup."""

    def test_returns_section(self):
        clear_cache()
        assert get_section('sampling') is load_constants()['sampling']

    def test_unknown_section_raises(self):
        clear_cache()
        with pytest.raises(KeyError, match="Unknown config section"):
            get_section('nonexistent')


class TestMissingConfig:
    """Tests for error handling on missing or incomplete files."""

    def test_missing_file_raises(self, tmp_path, monkeypatch):
        monkeypatch.setattr(loader, 'CONFIG_DIR', tmp_path)
        clear_cache()
        try:
            with pytest.raises(FileNotFoundError):
                load_constants()
        finally:
            clear_cache()

    def test_missing_section_raises(self, tmp_path, monkeypatch):
        (tmp_path / "constants.yaml").write_text("root_finding:\n  max_iter: 10\n")
        monkeypatch.setattr(loader, 'CONFIG_DIR', tmp_path)
        clear_cache()
        try:
            with pytest.raises(KeyError, match="estimation"):
                load_constants()
        finally:
            clear_cache()
