"""Unit tests for run-mode selection in the launcher."""

from unittest.mock import patch

import pytest

from src import main as launcher


class TestRunModeSelection:
    """Tests for main() dispatching on RUN_MODE."""

    @pytest.mark.parametrize("mode", ["integrated", "INTEGRATED", "bogus"])
    def test_integrated_and_unknown_modes_run_integrated(self, mode: str) -> None:
        with (
            patch.dict("os.environ", {"RUN_MODE": mode}),
            patch.object(launcher, "run_integrated") as run_integrated,
            patch.object(launcher, "run_separate") as run_separate,
        ):
            launcher.main()

        run_integrated.assert_called_once_with()
        run_separate.assert_not_called()

    def test_separate_mode(self) -> None:
        with (
            patch.dict("os.environ", {"RUN_MODE": "separate"}),
            patch.object(launcher, "run_integrated") as run_integrated,
            patch.object(launcher, "run_separate") as run_separate,
        ):
            launcher.main()

        run_separate.assert_called_once_with()
        run_integrated.assert_not_called()
