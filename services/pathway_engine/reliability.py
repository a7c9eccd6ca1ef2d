# services/pathway_engine/reliability.py
# Internal-consistency report (Cronbach's alpha) for each questionnaire block.

import json
import logging
import os
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from .definitions import ALL_BLOCKS, INTEREST_BLOCKS, INTEREST_DIMENSIONS, TYPE_DIMENSIONS

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.7

_LABELS = {dim["code"]: dim["label"] for dim in INTEREST_DIMENSIONS + TYPE_DIMENSIONS}


def calculate_cronbach_alpha(data: pd.DataFrame) -> float:
    """
    Calculates Cronbach's alpha for a set of items.
    Assumes data is a DataFrame where rows are respondents and columns are items.
    """
    if data.shape[1] < 2:  # Need at least 2 items
        return np.nan

    item_variances = data.var(axis=0, ddof=1).sum()
    total_variance = data.sum(axis=1).var(ddof=1)
    n_items = data.shape[1]

    if total_variance == 0:
        return 1.0 if item_variances == 0 else 0.0

    return (n_items / (n_items - 1)) * (1 - (item_variances / total_variance))


def load_responses(responses_path: str) -> pd.DataFrame:
    """
    Reads a batch of answer sets from CSV (one column per question index) or JSON
    (a list of ``{"answers": {...}}`` records or of plain answer dicts).
    """
    if responses_path.endswith('.csv'):
        responses_df = pd.read_csv(responses_path)
    elif responses_path.endswith('.json'):
        try:
            with open(responses_path, 'r') as f:
                responses_data = json.load(f)
        except json.JSONDecodeError:
            raise ValueError(f"Invalid JSON file: {responses_path}")
        if isinstance(responses_data, list) and responses_data and "answers" in responses_data[0]:
            responses_df = pd.DataFrame([r['answers'] for r in responses_data])
        else:
            responses_df = pd.DataFrame(responses_data)
    else:
        raise ValueError("Responses file must be a CSV or JSON file.")

    return _normalise_columns(responses_df)


def _normalise_columns(responses: pd.DataFrame) -> pd.DataFrame:
    # CSV headers and JSON keys arrive as strings, in-memory frames may use ints
    return responses.rename(columns=lambda column: str(column).strip())


def _item_statistics(series: pd.Series) -> Dict[str, Any]:
    return {
        "mean": series.mean(),
        "variance": series.var(ddof=1),
        "stddev": series.std(ddof=1),
        "min": series.min(),
        "max": series.max(),
    }


def convert_numpy_types(obj):
    if isinstance(obj, dict):
        return {k: convert_numpy_types(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [convert_numpy_types(i) for i in obj]
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return None if np.isnan(obj) else float(obj)
    elif isinstance(obj, float) and np.isnan(obj):
        return None
    return obj


def generate_reliability_report(
    responses: pd.DataFrame, threshold: Optional[float] = None
) -> Dict[str, Any]:
    """
    Cronbach's alpha and per-item statistics for all 14 question blocks.

    A block passes when alpha >= threshold. Blocks with fewer than two complete
    respondents or items cannot be scored and fail, as does ``overall_pass``.

    Args:
        responses: Rows are respondents, columns are question indices (0-99).
        threshold: Minimum acceptable alpha; defaults to 0.7.

    Returns:
        A JSON-serialisable report dictionary.
    """
    threshold = DEFAULT_THRESHOLD if threshold is None else threshold
    responses = _normalise_columns(responses)
    report: Dict[str, Any] = {
        "cronbach_alpha_threshold": threshold,
        "respondent_count": int(responses.shape[0]),
        "dimensions": {},
        "overall_pass": True,
    }

    for code, block in ALL_BLOCKS.items():
        question_ids: List[str] = [str(index) for index in block if str(index) in responses.columns]
        alpha = np.nan
        complete_rows = 0
        item_stats: Dict[str, Any] = {}

        if question_ids:
            block_data = responses[question_ids].apply(pd.to_numeric, errors='coerce').dropna()
            complete_rows = block_data.shape[0]
            if complete_rows >= 2 and block_data.shape[1] >= 2:
                alpha = calculate_cronbach_alpha(block_data)
            item_stats = {qid: _item_statistics(block_data[qid]) for qid in question_ids}
        else:
            logger.warning(f"No response columns found for dimension {code}")

        is_pass = bool(not np.isnan(alpha) and alpha >= threshold)
        report["dimensions"][code] = {
            "name": _LABELS[code],
            "family": "interest" if code in INTEREST_BLOCKS else "type",
            "cronbach_alpha": alpha,
            "pass": is_pass,
            "item_count": len(question_ids),
            "respondent_count_for_alpha": complete_rows,
            "item_statistics": item_stats,
        }
        if not is_pass:
            report["overall_pass"] = False

    return convert_numpy_types(report)


if __name__ == '__main__':
    import argparse

    from .config import engine_settings
    from .logging_config import setup_logging

    parser = argparse.ArgumentParser(description="Generate questionnaire reliability report")
    parser.add_argument(
        "--responses",
        type=str,
        default=os.getenv('PATHWAY_RESPONSES_PATH', 'responses.csv'),
        help="Path to the CSV/JSON file of collected answer sets."
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=engine_settings.reliability_threshold,
        help="Minimum acceptable Cronbach's alpha per dimension."
    )
    args = parser.parse_args()

    setup_logging(engine_settings.log_level)
    report = generate_reliability_report(load_responses(args.responses), args.threshold)
    print(json.dumps(report, indent=2))
