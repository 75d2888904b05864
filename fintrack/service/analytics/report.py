"""PDF report rendering for filtered transaction sets."""

import io
from datetime import datetime
from typing import List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.backends.backend_pdf import PdfPages  # noqa: E402

from fintrack.domain.entities import Transaction  # noqa: E402

from .charts import format_day_label  # noqa: E402
from .models import ExportArtifact, Summary  # noqa: E402

PDF_MEDIA_TYPE = "application/pdf"

PAGE_SIZE = (8.27, 11.69)  # A4, inches
ROWS_PER_PAGE = 40
DESCRIPTION_WIDTH = 40


def format_money(amount: float, currency: str) -> str:
    return f"{currency} {amount:,.2f}"


def report_filename(product: str, label: str) -> str:
    return f"{product}_report_{label}.pdf"


def _transaction_rows(transactions: Sequence[Transaction], currency: str) -> List[list]:
    rows = []
    for txn in transactions:
        description = txn.description or ""
        if len(description) > DESCRIPTION_WIDTH:
            description = description[: DESCRIPTION_WIDTH - 3] + "..."
        rows.append(
            [
                format_day_label(txn.date),
                txn.type.value.upper(),
                txn.category or "-",
                format_money(txn.amount, currency),
                description,
            ]
        )
    return rows


def _draw_table(ax, rows: List[list], columns: List[str], font_size: int) -> None:
    ax.axis("off")
    table = ax.table(
        cellText=rows,
        colLabels=columns,
        loc="upper center",
        cellLoc="left",
    )
    table.auto_set_font_size(False)
    table.set_fontsize(font_size)
    table.scale(1, 1.2)


def encode_pdf(
    transactions: Sequence[Transaction],
    summary: Summary,
    range_description: str,
    label: str,
    title: str,
    product: str,
    currency: str,
    generated_at: Optional[datetime] = None,
) -> Optional[ExportArtifact]:
    """
    Render a formatted report of a filtered set.

    The first page carries the title, range, generation time, totals and
    the per-category table; the transaction table follows on as many
    pages as it needs.

    Returns:
        The artifact, or None when there is nothing to export
    """
    if not transactions:
        return None

    generated_at = generated_at or datetime.now()
    buffer = io.BytesIO()

    with PdfPages(buffer) as pdf:
        fig, ax = plt.subplots(figsize=PAGE_SIZE)
        fig.text(0.07, 0.95, title, fontsize=16, weight="bold")
        fig.text(0.07, 0.925, f"Range: {range_description}", fontsize=11)
        fig.text(0.07, 0.905, f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}", fontsize=11)
        fig.text(
            0.07,
            0.875,
            f"Total Income: {format_money(summary.total_income, currency)}",
            fontsize=12,
        )
        fig.text(
            0.40,
            0.875,
            f"Total Expense: {format_money(summary.total_expense, currency)}",
            fontsize=12,
        )
        fig.text(
            0.73,
            0.875,
            f"Net: {format_money(summary.net_balance, currency)}",
            fontsize=12,
        )

        ax.set_position([0.07, 0.05, 0.86, 0.8])
        if summary.category_totals:
            category_rows = [
                [c.name, format_money(c.value, currency)] for c in summary.category_totals
            ]
            _draw_table(ax, category_rows, ["Category", "Amount"], font_size=10)
        else:
            ax.axis("off")
            ax.text(0.0, 1.0, "No expenses in this period", fontsize=10, va="top")

        pdf.savefig(fig)
        plt.close(fig)

        rows = _transaction_rows(transactions, currency)
        for offset in range(0, len(rows), ROWS_PER_PAGE):
            fig, ax = plt.subplots(figsize=PAGE_SIZE)
            fig.text(0.07, 0.95, "Transactions", fontsize=13, weight="bold")
            ax.set_position([0.07, 0.05, 0.86, 0.87])
            _draw_table(
                ax,
                rows[offset : offset + ROWS_PER_PAGE],
                ["Date", "Type", "Category", "Amount", "Description"],
                font_size=9,
            )
            pdf.savefig(fig)
            plt.close(fig)

    return ExportArtifact(
        filename=report_filename(product, label),
        media_type=PDF_MEDIA_TYPE,
        content=buffer.getvalue(),
    )
