# salesboard/dashboard/charts.py: rendering helpers for the filtered view

from typing import Dict, Sequence

import pandas as pd
import plotly.express as px

COLUMNS = ["item_name", "category", "units_sold", "revenue"]

METRIC_LABELS = {
    "units_sold": "Units sold",
    "revenue": "Revenue",
}


def records_frame(records: Sequence) -> pd.DataFrame:
    rows = [r if isinstance(r, dict) else r.model_dump() for r in records]
    df = pd.DataFrame(rows)
    for c in COLUMNS:
        if c not in df.columns:
            df[c] = pd.NA
    return df[COLUMNS]


def summary_cards(records: Sequence) -> Dict[str, float]:
    df = records_frame(records)
    return {
        "Items": int(len(df)),
        "Units sold": float(pd.to_numeric(df["units_sold"], errors="coerce").sum(skipna=True)),
        "Revenue": float(pd.to_numeric(df["revenue"], errors="coerce").sum(skipna=True)),
    }


def metric_bar_chart(records: Sequence, metric: str):
    """Bar per item, coloured by category; `metric` picks the field shown."""
    if metric not in METRIC_LABELS:
        raise ValueError(f"Unknown metric: {metric}")
    df = records_frame(records)
    return px.bar(
        df,
        x="item_name",
        y=metric,
        color="category",
        labels={"item_name": "Item", metric: METRIC_LABELS[metric], "category": "Category"},
        title=f"{METRIC_LABELS[metric]} by item",
    )
