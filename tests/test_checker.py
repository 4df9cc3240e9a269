"""Tests for the configured lineup checker."""

import pytest

from volley_overlap.config import CacheConfig, Config, ToleranceConfig
from volley_overlap.core.coordinates import Point
from volley_overlap.exceptions import ConfigurationError
from volley_overlap.validate.cache import LineupCache
from volley_overlap.validate.checker import LineupChecker
from volley_overlap.validate.constraints import calculate_valid_bounds
from volley_overlap.validate.models import ViolationCode


def _config(epsilon, max_entries=1000):
    return Config(
        tolerance=ToleranceConfig(epsilon=epsilon),
        cache=CacheConfig(max_entries=max_entries),
    )


class TestConstruction:
    """Tolerance and cache setup."""

    def test_defaults(self):
        checker = LineupChecker()
        assert checker.epsilon == 0.03
        assert checker.cache is None

    def test_from_config(self):
        checker = LineupChecker.from_config(_config(0.2, max_entries=50))
        assert checker.epsilon == 0.2
        assert isinstance(checker.cache, LineupCache)
        assert checker.cache.max_entries == 50

    def test_from_config_without_cache(self):
        assert LineupChecker.from_config(Config(), use_cache=False).cache is None

    def test_zero_tolerance_allowed(self):
        assert LineupChecker(epsilon=0).epsilon == 0.0

    @pytest.mark.parametrize("epsilon", [-0.01, float("nan"), float("inf"), True, "0.03"])
    def test_rejects_bad_tolerance(self, epsilon):
        with pytest.raises(ConfigurationError, match="non-negative"):
            LineupChecker(epsilon=epsilon)

    def test_loaded_file(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".volley-overlap.toml").write_text("[tolerance]\nepsilon = 0.2\n")
        monkeypatch.setattr("volley_overlap.config.USER_CONFIG_PATH", tmp_path / "none.toml")

        checker = LineupChecker.from_config(Config.load(tmp_path))
        assert checker.epsilon == 0.2


class TestConfiguredTolerance:
    """The configured tolerance reaches every operation."""

    @pytest.fixture
    def lineup(self, make_lineup):
        # 10 cm between middle front and right front
        return make_lineup(s3={"x": 7.9})

    def test_check(self, lineup):
        assert LineupChecker().check(lineup).is_legal
        result = LineupChecker.from_config(_config(0.2)).check(lineup)
        assert result.codes == [ViolationCode.ROW_ORDER]

    def test_validate(self, make_lineup):
        lineup = make_lineup(s2={"x": 9.1})
        assert LineupChecker().validate(lineup).codes == [ViolationCode.OUT_OF_BOUNDS]
        assert LineupChecker.from_config(_config(0.2)).validate(lineup).is_legal

    def test_bounds(self, legal_lineup):
        checker = LineupChecker.from_config(_config(0.5))
        bounds = checker.bounds(3, legal_lineup)
        assert bounds.min_x == pytest.approx(1.5)
        assert bounds.max_x == pytest.approx(7.5)
        assert bounds == calculate_valid_bounds(3, legal_lineup, epsilon=0.5)

    def test_bounds_without_cache(self, legal_lineup):
        checker = LineupChecker.from_config(_config(0.5), use_cache=False)
        assert checker.bounds(3, legal_lineup).min_x == pytest.approx(1.5)

    def test_all_bounds(self, legal_lineup):
        all_bounds = LineupChecker.from_config(_config(0.5)).all_bounds(legal_lineup)
        assert all_bounds[3].max_x == pytest.approx(7.5)
        assert all_bounds[5].min_y == pytest.approx(4.5)

    def test_is_position_valid_and_snap(self, legal_lineup):
        checker = LineupChecker.from_config(_config(0.5))
        assert not checker.is_position_valid(3, (7.6, 4.0), legal_lineup)
        snapped = checker.snap(3, (7.6, 4.0), legal_lineup)
        assert snapped.x == pytest.approx(7.5)
        assert snapped.y == 4.0
        assert checker.snap(3, (5.0, 3.0), legal_lineup) == Point(5.0, 3.0)

    def test_is_position_legal(self, legal_lineup):
        assert LineupChecker().is_position_legal(3, (7.9, 4.0), legal_lineup)
        checker = LineupChecker.from_config(_config(0.2))
        assert not checker.is_position_legal(3, (7.9, 4.0), legal_lineup)

    def test_suggest_fix_uses_tolerance(self, lineup):
        checker = LineupChecker.from_config(_config(0.2))
        violation = checker.check(lineup).violations[0]
        assert checker.suggest_fix(violation, lineup) == (
            "Increase separation between Middle Front and Right Front to at least 20cm."
        )


class TestCaching:
    """Repeated checks are served from the checker's cache."""

    def test_repeat_check_hits(self, legal_lineup):
        checker = LineupChecker.from_config(Config())
        first = checker.check(legal_lineup)
        second = checker.check(list(reversed(legal_lineup)))
        assert second is first
        assert checker.cache.stats.hits == 1

    def test_generator_lineup(self, legal_lineup):
        checker = LineupChecker.from_config(Config())
        assert checker.check(p for p in legal_lineup).is_legal
        assert checker.check(p for p in legal_lineup).is_legal
        assert checker.cache.stats.hits == 1

    def test_malformed_lineup(self):
        checker = LineupChecker.from_config(Config())
        assert checker.check(None).codes == [ViolationCode.INVALID_LINEUP_TYPE]
