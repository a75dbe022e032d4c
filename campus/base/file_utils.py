import io
import logging
from typing import Any, Dict, Iterator, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)


def normalize_column_name(name: Any) -> str:
    """'Admission Number' / 'admission_number' / 'AdmissionNumber' -> 'admissionnumber'"""
    return "".join(str(name).split()).replace("_", "").lower()


def read_file_to_dataframe(
    file, file_type: Optional[str] = None
) -> Tuple[Optional[pd.DataFrame], Optional[str]]:
    """Read CSV or Excel file and return DataFrame"""
    name = file.name.lower()
    if file_type is None:
        file_type = "csv" if name.endswith(".csv") else "excel"

    try:
        if file_type == "csv":
            if not name.endswith(".csv"):
                return None, "Please upload a CSV file"
            file_content = file.read().decode("utf-8-sig")
            df = pd.read_csv(io.StringIO(file_content), dtype=str)
        elif file_type == "excel":
            if not name.endswith((".xlsx", ".xls")):
                return None, "Please upload an Excel file"
            df = pd.read_excel(file, dtype=str)
        else:
            return None, "Unsupported file type"
    except Exception as e:
        logger.warning("Could not read uploaded file %s: %s", file.name, e)
        return None, f"Error reading file: {str(e)}"

    df.columns = [normalize_column_name(c) for c in df.columns]
    return df.fillna(""), None


def dataframe_rows(df: pd.DataFrame) -> Iterator[Tuple[int, Dict[str, str]]]:
    """Yield (spreadsheet row number, stripped string values) pairs"""
    for index, row in df.iterrows():
        yield index + 2, {k: str(v).strip() for k, v in row.to_dict().items()}
