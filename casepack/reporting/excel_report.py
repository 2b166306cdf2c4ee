import io
import logging
from typing import Dict

import pandas as pd
from openpyxl.styles import Font, PatternFill

from casepack.logic.models import OptimizationResult

logger = logging.getLogger("ExcelReport")

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

HEADER_FILL = PatternFill(start_color="4A9EFF", end_color="4A9EFF", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")


def build_report_frames(result: OptimizationResult) -> Dict[str, pd.DataFrame]:
    """One DataFrame per sheet: Summary, Stores, Warehouses, CasePacks."""
    summary = pd.DataFrame([
        {"Metric": "Items Per Casepack", "Value": result.items_per_casepack},
        {"Metric": "Total Need (Items)", "Value": result.total_need},
        {"Metric": "Total Available Casepacks", "Value": result.total_available},
        {"Metric": "Total Allocated Casepacks", "Value": result.total_allocated},
        {"Metric": "Remaining Supply", "Value": result.remaining_supply},
    ])

    stores = pd.DataFrame(
        [
            {
                "Store": store,
                "Target Casepacks": round(result.targets.get(store, 0.0), 2),
                "Allocated Casepacks": qty,
                "Allocated Items": qty * result.items_per_casepack,
            }
            for store, qty in result.stores.items()
        ],
        columns=["Store", "Target Casepacks", "Allocated Casepacks", "Allocated Items"],
    )

    warehouses = pd.DataFrame(
        [{"Warehouse": wh, "Distributed Casepacks": qty} for wh, qty in result.warehouses.items()],
        columns=["Warehouse", "Distributed Casepacks"],
    )

    case_packs = pd.DataFrame(
        [
            {
                "Casepack": i + 1,
                "Packs": cp.packs,
                "Size Ratios": ", ".join(str(q) for q in cp.size_ratios),
                "Items": sum(cp.size_ratios),
                "Used": i == 0,
            }
            for i, cp in enumerate(result.case_packs)
        ],
        columns=["Casepack", "Packs", "Size Ratios", "Items", "Used"],
    )

    return {
        "Summary": summary,
        "Stores": stores,
        "Warehouses": warehouses,
        "CasePacks": case_packs,
    }


def _write_frames(result: OptimizationResult, target):
    frames = build_report_frames(result)
    with pd.ExcelWriter(target, engine='openpyxl') as writer:
        for sheet_name, df in frames.items():
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            ws = writer.sheets[sheet_name]
            for cell in ws[1]:
                cell.font = HEADER_FONT
                cell.fill = HEADER_FILL


def write_excel_report(result: OptimizationResult, output_path: str) -> str:
    logger.info(f"Generating Excel report: {output_path}")
    _write_frames(result, output_path)
    logger.info("Excel report saved successfully.")
    return output_path


def report_bytes(result: OptimizationResult) -> bytes:
    """Workbook built entirely in memory, for HTTP and dashboard downloads."""
    buffer = io.BytesIO()
    _write_frames(result, buffer)
    return buffer.getvalue()
