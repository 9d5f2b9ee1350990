"""SniperReportWriter: builds snipers_<SYMBOL>.xlsx with openpyxl."""

from datetime import datetime
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from snipertrack.domain.models.sniper import DetectionParams, SniperResult

# (header, SniperResult attribute, number format or None)
SNIPER_COLUMNS: list[tuple[str, str, str | None]] = [
    ("Wallet", "wallet", None),
    ("Realized PnL (USD)", "realized_pnl", "$#,##0.0000"),
    ("Unrealized Value (USD)", "unrealized_pnl", "$#,##0.0000"),
    ("Tokens Left", "tokens_remaining", "#,##0.0000"),
    ("Buys", "buy_count", None),
    ("Sells", "sell_count", None),
    ("First Buy", "first_buy_time", None),
    ("Last Sell", "last_sell_time", None),
    ("Avg Buy Price", "avg_buy_price", "$#,##0.0000"),
    ("Avg Sell Price", "avg_sell_price", "$#,##0.0000"),
    ("Total Tax", "total_tax", "#,##0.0000"),
    ("Total Fees", "total_fees", "#,##0.0000"),
]

HEADER_FONT = Font(bold=True)


def _cell_value(value):
    # openpyxl rejects tz-aware datetimes
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return value


class SniperReportWriter:
    """Writes one token's sniper results to an in-memory Excel buffer."""

    def write_to_buffer(
        self,
        symbol: str,
        results: list[SniperResult],
        params: DetectionParams,
        launch_block: int,
    ) -> BytesIO:
        wb = Workbook()

        summary = wb.active
        summary.title = "summary"
        summary_rows = [
            ("Token", symbol.upper()),
            ("Launch Block", launch_block),
            ("Snipers", len(results)),
            ("Total Realized PnL (USD)", sum((r.realized_pnl for r in results), 0)),
            ("Chunk Volume Threshold", params.chunk_volume_threshold),
            ("Chunk Window (min)", params.chunk_window.total_seconds() / 60),
            ("Fee Threshold", params.fee_threshold),
            ("Launch Grace Blocks", params.launch_grace_blocks),
            ("Quick Exit Window (min)", params.quick_exit_window.total_seconds() / 60),
        ]
        for col_idx, header in enumerate(["Metric", "Value"], start=1):
            summary.cell(row=1, column=col_idx, value=header).font = HEADER_FONT
        for row_idx, (metric, value) in enumerate(summary_rows, start=2):
            summary.cell(row=row_idx, column=1, value=metric)
            summary.cell(row=row_idx, column=2, value=value)
        _auto_fit_columns(summary)

        ws = wb.create_sheet(title="snipers")
        for col_idx, (header, _, _) in enumerate(SNIPER_COLUMNS, start=1):
            ws.cell(row=1, column=col_idx, value=header).font = HEADER_FONT

        for row_idx, result in enumerate(results, start=2):
            for col_idx, (_, attr, fmt) in enumerate(SNIPER_COLUMNS, start=1):
                cell = ws.cell(row=row_idx, column=col_idx, value=_cell_value(getattr(result, attr)))
                if fmt:
                    cell.number_format = fmt
        _auto_fit_columns(ws)

        buf = BytesIO()
        wb.save(buf)
        buf.seek(0)
        return buf


def _auto_fit_columns(ws) -> None:
    """Set column widths based on content (approximate)."""
    for col_cells in ws.columns:
        max_len = max((len(str(cell.value)) for cell in col_cells if cell.value is not None), default=0)
        ws.column_dimensions[get_column_letter(col_cells[0].column)].width = min(max_len + 3, 50)
