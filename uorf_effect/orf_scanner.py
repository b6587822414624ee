"""
Three-frame scan of a 5-prime UTR for upstream open reading frames.
"""
from typing import List, Tuple

from uorf_effect.models import Uorf, UorfType

START_CODON = 'ATG'
STOP_CODONS = {'TAA', 'TAG', 'TGA'}
# Kozak context bases that each add one to start codon strength
UPSTREAM_KOZAK_BASES = {'A', 'G'}
DOWNSTREAM_KOZAK_BASE = 'G'


def start_codon_strength(bases: str, i: int) -> int:
    """
    Strength of the start codon at ``i``, from 1 (weak) to 3 (strong).

    A purine at -3 and a G at +4 each add one.
    """
    strength = 1
    if i >= 3 and bases[i - 3] in UPSTREAM_KOZAK_BASES:
        strength += 1
    if i + 3 < len(bases) and bases[i + 3] == DOWNSTREAM_KOZAK_BASE:
        strength += 1
    return strength


def find_uorfs(bases: str, offset: int, uorfs: List[Uorf]) -> str:
    """
    Find ORFs in one reading frame of a UTR.

    Args:
        bases: Upper-case UTR bases, ending just before the main start codon
        offset: Position of the first codon (0, 1 or 2)
        uorfs: List that found ORFs are appended to, left to right

    Returns:
        Visualisation of the frame: codons separated by spaces, lower-case
        outside ORFs, with the start codon strength written after each ATG
    """
    visualisation = []
    if offset > 0:
        visualisation.append(bases[:offset].lower() + " ")
    in_uorf = False
    strength = 0
    distance = 0
    i = offset
    while i < len(bases) - 2:
        codon = bases[i:i + 3]
        if in_uorf:
            visualisation.append(codon + " ")
            if codon in STOP_CODONS:
                uorfs.append(Uorf(distance, len(bases) + 3 - i, strength, UorfType.NON_OVERLAPPING))
                in_uorf = False
                strength = 0
                distance = 0
        elif codon == START_CODON:
            in_uorf = True
            strength = start_codon_strength(bases, i)
            distance = len(bases) - i
            visualisation.append(codon + str(strength))
        else:
            visualisation.append(codon.lower() + " ")
        i += 3
    if in_uorf:
        # Stepping exactly onto the end means the ORF is in frame with the gene
        uorf_type = UorfType.EXTENDING if i == len(bases) else UorfType.FRAMESHIFT
        uorfs.append(Uorf(distance, 0, strength, uorf_type))
    visualisation.append(bases[i:] if in_uorf else bases[i:].lower())
    return ''.join(visualisation)


def frame_offsets(length: int) -> Tuple[int, int, int]:
    """Codon offsets for frames 0, 1 and 2, where frame 0 is in frame with the gene."""
    return length % 3, (length + 1) % 3, (length + 2) % 3


def scan_frames(bases: str) -> Tuple[List[str], List[Uorf]]:
    """
    Scan all three frames of a UTR.

    Returns:
        Tuple of (visualisations for frames 0, 1 and 2, all ORFs found)
    """
    uorfs = []
    visualisations = [find_uorfs(bases, offset, uorfs) for offset in frame_offsets(len(bases))]
    return visualisations, uorfs
