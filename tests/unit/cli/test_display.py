"""Unit tests for shared CLI display functions."""

import pytest
from rdsjanitor.cli.display import (
    create_actions_table,
    create_results_table,
    print_results_summary,
)
from rdsjanitor.models.action import Action, ActionResult, ActionType


def _action(target: str = "3", label: str = "bob") -> Action:
    """Create a test logoff action."""
    return Action(action_type=ActionType.LOGOFF_SESSION, target=target, label=label)


class TestTables:
    """Tests for action and result tables."""

    def test_actions_table(self) -> None:
        """One row per planned action."""
        table = create_actions_table([_action("3"), _action("4", "carol")])

        assert table.row_count == 2
        assert table.title == "Planned Actions"

    def test_actions_table_dry_run_title(self) -> None:
        """Dry-run is marked in the title."""
        assert create_actions_table([_action()], dry_run=True).title == "Planned Actions (Dry Run)"

    def test_results_table(self) -> None:
        """One row per result."""
        results = [
            ActionResult(action=_action("3"), success=True, message="Completed"),
            ActionResult(action=_action("4"), success=False, error="Access is denied."),
        ]
        table = create_results_table(results)

        assert table.row_count == 2
        assert [c.header for c in table.columns] == ["Status", "User", "Target", "Message"]


class TestPrintResultsSummary:
    """Tests for print_results_summary function."""

    def test_all_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """All successful results print a success line."""
        print_results_summary([ActionResult(action=_action(), success=True)])

        assert "All 1 action(s) completed successfully" in capsys.readouterr().out

    def test_partial_failure(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Failures are counted and flagged for the next run."""
        print_results_summary(
            [
                ActionResult(action=_action("3"), success=True),
                ActionResult(action=_action("4"), success=False, error="denied"),
            ]
        )

        captured = capsys.readouterr()
        assert "1 succeeded" in captured.out
        assert "1 failed" in captured.out
        assert "retried on the next run" in captured.err

    def test_dry_run(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Dry-run results are summarised as such."""
        print_results_summary([ActionResult(action=_action(), success=True, dry_run=True)])

        assert "Dry-run: 1 action(s) would be executed" in capsys.readouterr().out
