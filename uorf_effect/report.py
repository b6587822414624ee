"""
Text and tabular output for uORF results.
"""
from typing import List, Sequence

import pandas as pd

from uorf_effect.models import UorfResult

ORF_COLUMNS = ['allele', 'rank', 'type', 'distance', 'stop_distance', 'strength', 'strength_text']


def format_uorf_list(uorfs: Sequence) -> str:
    return '[' + ', '.join(str(uorf) for uorf in uorfs) + ']'


def format_report(result: UorfResult) -> List[str]:
    """Lines of the human-readable report for one variant."""
    lines = [f"Effect: {result.effect}"]
    if result.uorf is not None:
        lines.append(f"Start codon strength: {result.uorf.strength_string}")
        lines.append(f"Start codon distance: {result.uorf.distance}")
        lines.append(f"ORF finish distance: {result.uorf.stop_distance}")
    if result.ref_uorfs is not None:
        lines.append(f"uORFs in reference: {format_uorf_list(result.ref_uorfs)}")
        lines.append(f"uORFs in alternate: {format_uorf_list(result.alt_uorfs)}")
    if result.visualisations is not None:
        for frame in range(3):
            lines.append(f"Reference UTR bases, offset {frame}: {result.visualisation(frame)}")
            lines.append(f"Alternate UTR bases, offset {frame}: {result.visualisation(frame, alternate=True)}")
    return lines


def uorfs_to_dataframe(result: UorfResult) -> pd.DataFrame:
    """One row per ORF found in either allele, in rank order."""
    rows = []
    for allele, uorfs in (('reference', result.ref_uorfs), ('alternate', result.alt_uorfs)):
        for rank, uorf in enumerate(uorfs or (), start=1):
            rows.append({
                'allele': allele,
                'rank': rank,
                'type': uorf.type.value,
                'distance': uorf.distance,
                'stop_distance': uorf.stop_distance,
                'strength': uorf.strength,
                'strength_text': uorf.strength_string,
            })
    return pd.DataFrame(rows, columns=ORF_COLUMNS)
