"""
Terminal report for Spin Odds.

Uses Rich to render distributions, probability tables and profitability.
"""

from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from spin_odds.core.models import (
    CollectionEstimate,
    Distribution,
    PrizeProfitability,
    TrialCostRow,
)


class Report:
    """
    Renders engine results to the terminal.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_distribution(self, distribution: Distribution):
        """Prize table with weights and probabilities."""
        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Prize")
        table.add_column("Value", justify="right")
        table.add_column("Trials Needed", justify="right")
        table.add_column("Weight", justify="right")
        table.add_column("Probability", justify="right")

        for p in distribution:
            table.add_row(
                p.name,
                f"{p.value:,.2f}",
                f"{p.trials_needed:.3f}",
                f"{p.weight:.4f}",
                f"{p.probability:.4%}",
            )

        table.add_section()
        table.add_row(
            "[b]Total[/b]",
            "",
            "",
            f"{distribution.total_weight:.4f}",
            f"[b]{distribution.total_probability:.2%}[/b]",
            style="yellow",
        )

        self.console.print(Panel(
            table,
            title=f"Prize Odds (price {distribution.trial_price:,.2f})",
            border_style="cyan",
        ))

    def show_summary(self, title: str, rows: Sequence[Tuple[str, str]]):
        """Two-column label/value panel."""
        grid = Table.grid(expand=True)
        grid.add_column()
        grid.add_column(justify="right")

        for label, value in rows:
            grid.add_row(label, f"[b]{value}[/b]")

        self.console.print(Panel(grid, title=title, border_style="green"))

    def show_probability_table(self, target_name: str, rows: List[TrialCostRow]):
        """Probability of winning a prize against trials and cost."""
        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Trials", justify="right")
        table.add_column("Probability", justify="right")
        table.add_column("Cumulative Cost", justify="right")

        for row in rows:
            table.add_row(str(row.trials), f"{row.probability:.2%}", f"{row.cost:,.2f}")

        self.console.print(Panel(table, title=f"Probability Table: {target_name}", border_style="blue"))

    def show_collection(
        self,
        estimate: CollectionEstimate,
        budgets: Sequence[Tuple[int, float]],
    ):
        """Expected trials for the full set plus completion odds per budget."""
        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Trials", justify="right")
        table.add_column("P(all prizes)", justify="right")

        for trials, probability in budgets:
            table.add_row(str(trials), f"{probability:.2%}")

        expected = f"{estimate.mean_trials:.2f}"
        if estimate.is_biased:
            expected += f" (underestimate: {estimate.capped_runs} runs capped at {estimate.max_draws})"

        self.console.print(Panel(
            table,
            title=f"Collect Every Prize - expected trials {expected}",
            border_style="magenta",
        ))

    def show_profitability(self, rows: List[PrizeProfitability]):
        """Expected cost versus value per prize."""
        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Prize")
        table.add_column("Exp. Trials", justify="right")
        table.add_column("Exp. Cost", justify="right")
        table.add_column("Value", justify="right")
        table.add_column("Profit", justify="right")
        table.add_column("Ratio", justify="right")

        for r in rows:
            style = "green" if r.is_profitable else "red"
            table.add_row(
                r.name,
                f"{r.expected_trials:.2f}",
                f"{r.expected_cost:,.2f}",
                f"{r.value:,.2f}",
                f"{r.profit:,.2f}",
                f"{r.profit_ratio:.1%}",
                style=style,
            )

        self.console.print(Panel(table, title="Profitability", border_style="white"))
