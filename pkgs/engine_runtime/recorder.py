"""
Recording of recurrence trajectories with multiple output formats.

SimpleRecorder keeps one row per step and writes CSV, JSONL or Parquet.
Parquet needs the optional pandas/pyarrow extra.
"""
import csv
import json
import os
import logging
from typing import Dict, List, Any, Iterable
from datetime import datetime, timezone
import numpy as np

logger = logging.getLogger('RecurrenceCore')


class SimpleRecorder:
    """Row recorder for per-step trajectory records."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.rows: List[Dict[str, Any]] = []
        self._metadata = {
            'created_at': datetime.now(timezone.utc).isoformat(),
            'variant': None,
            'parameters': None
        }

    def set_metadata(self, **kwargs):
        """Set metadata that will be included in recordings."""
        self._metadata.update(kwargs)

    @property
    def metadata(self) -> Dict[str, Any]:
        return dict(self._metadata)

    def log(self, row: Dict[str, Any]):
        """Log one row, converting numpy scalars and arrays to plain Python values."""
        if not self.enabled:
            return

        clean_row = {}
        for k, v in row.items():
            if isinstance(v, (bool, np.bool_)):
                clean_row[k] = bool(v)
            elif isinstance(v, (int, np.integer)):
                clean_row[k] = int(v)
            elif isinstance(v, (float, np.floating)):
                clean_row[k] = float(v)
            elif isinstance(v, np.ndarray):
                clean_row[k] = float(v.item()) if v.size == 1 else v.tolist()
            else:
                clean_row[k] = str(v)

        self.rows.append(clean_row)

    def log_records(self, records: Iterable[Dict[str, Any]]):
        for row in records:
            self.log(row)

    def dump_csv(self, path: str):
        """Dump rows to CSV, columns in first-row order."""
        if not self.enabled or not self.rows:
            return

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        keys = list(self.rows[0].keys())
        with open(path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=keys)
            writer.writeheader()
            for row in self.rows:
                writer.writerow({k: str(v) if isinstance(v, list) else v for k, v in row.items()})
        logger.info(f"Saved {len(self.rows)} rows to CSV: {path}")

    def dump_jsonl(self, path: str):
        """Dump to JSONL with the metadata on the first line."""
        if not self.enabled or not self.rows:
            return

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        with open(path, 'w') as f:
            f.write(json.dumps({'_metadata': self._metadata}) + '\n')
            for row in self.rows:
                f.write(json.dumps(row) + '\n')

        logger.info(f"Saved {len(self.rows)} rows to JSONL: {path}")

    def dump_parquet(self, path: str):
        """Dump to Parquet, storing metadata in the schema metadata."""
        if not self.enabled or not self.rows:
            return

        try:
            import pandas as pd
            import pyarrow as pa
            import pyarrow.parquet as pq
        except ImportError:
            logger.warning("pandas/pyarrow not available, skipping Parquet export")
            return

        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        df = pd.DataFrame(self.rows)
        table = pa.Table.from_pandas(df, preserve_index=False)
        table = table.replace_schema_metadata({'metadata': json.dumps(self._metadata)})

        pq.write_table(table, path)
        logger.info(f"Saved {len(df)} rows to Parquet: {path}")

    def dump_all_formats(self, base_path: str):
        """Write <base>.csv, <base>.jsonl and <base>.parquet next to each other."""
        base_dir = os.path.dirname(base_path)
        base_name = os.path.splitext(os.path.basename(base_path))[0]

        self.dump_csv(os.path.join(base_dir, f"{base_name}.csv"))
        self.dump_jsonl(os.path.join(base_dir, f"{base_name}.jsonl"))
        self.dump_parquet(os.path.join(base_dir, f"{base_name}.parquet"))

    def clear(self):
        """Clear all logged rows."""
        self.rows.clear()

    def get_summary(self) -> Dict[str, Any]:
        """Row count, columns and basic stats for numeric columns."""
        if not self.rows:
            return {'row_count': 0}

        summary = {
            'row_count': len(self.rows),
            'columns': list(self.rows[0].keys()),
        }

        numeric_cols: Dict[str, List[float]] = {}
        for row in self.rows:
            for k, v in row.items():
                if isinstance(v, (int, float)) and not isinstance(v, bool) and k != 'step':
                    numeric_cols.setdefault(k, []).append(v)

        summary['numeric_stats'] = {}
        for col, values in numeric_cols.items():
            summary['numeric_stats'][col] = {
                'count': len(values),
                'mean': float(np.mean(values)),
                'std': float(np.std(values)),
                'min': float(np.min(values)),
                'max': float(np.max(values))
            }

        return summary
