"""
FlowSample - decoded events plus the TEXT segment keywords.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from fcsdecode.constants import SUMMARY_KEYWORDS

if TYPE_CHECKING:
    from fcsdecode.formats.fcs3.header import Header

LOGGER = logging.getLogger(__name__)


@dataclass
class FlowSample:
    """
    A decoded flow cytometry sample.

    Attributes:
        data: One float64 column per parameter, labelled with $PnS
        parameters: All keyword/value pairs from the TEXT segment
        header: Parsed header, when the sample was read from a file
    """

    data: pd.DataFrame
    parameters: Dict[str, str]
    header: Optional["Header"] = None

    @property
    def column_names(self) -> List[str]:
        return [str(c) for c in self.data.columns]

    def get_dataframe_columns(self) -> List[str]:
        """Return the column labels of the event table."""
        return self.column_names

    @property
    def n_events(self) -> int:
        return len(self.data.index)

    @property
    def n_parameters(self) -> int:
        return len(self.data.columns)

    def keyword(self, name: str, default: str = "Unknown") -> str:
        """Get a TEXT keyword, falling back to a default."""
        return self.parameters.get(name, default)

    def arcsinh_transform(self, cofactor: float, channels: Sequence[str]) -> None:
        """
        Apply arcsinh(x / cofactor) to the given channels in place.

        Args:
            cofactor: Scale applied before the transform (5 for mass
                cytometry, ~150 for fluorescence is common)
            channels: Column labels to transform
        """
        if cofactor <= 0:
            raise ValueError(f"cofactor must be positive, got {cofactor}")

        for channel in channels:
            if channel not in self.data.columns:
                LOGGER.warning("Skipping arcsinh transform of unknown channel %s", channel)
                continue
            self.data[channel] = np.arcsinh(self.data[channel] / cofactor)

    def __str__(self) -> str:
        lines = ["FlowSample:"]
        for label, keyword in SUMMARY_KEYWORDS:
            lines.append(f"    {label}: {self.keyword(keyword)}")

        lines.append("    Labels: ")
        try:
            n_params = int(self.parameters.get("$PAR", "0"))
        except ValueError:
            n_params = 0
        for i in range(1, n_params + 1):
            long_name = self.parameters.get(f"$P{i}S")
            if long_name is not None:
                lines.append(f"        {self.keyword(f'$P{i}N')} ({long_name})")

        return "\n".join(lines) + "\n"
