"""
Module for building spliced 5-prime UTR sequences with and without a variant.
"""
import logging
from typing import Optional, Tuple

from Bio.Seq import Seq

from uorf_effect.models import FivePrimeUtr, FivePrimeUtrExon, Variant

logger = logging.getLogger(__name__)

VALID_BASES = frozenset('ACGT')


class InvalidBaseSequenceError(ValueError):
    """Raised when a sequence contains something other than A, C, G or T."""


def reverse_complement(bases: str) -> str:
    """
    Get reverse complement of sequence.

    Args:
        bases: Upper-case DNA sequence

    Returns:
        The reverse complement of the input sequence

    Raises:
        InvalidBaseSequenceError: if any character is not A, C, G or T
    """
    if not VALID_BASES.issuperset(bases):
        raise InvalidBaseSequenceError(f"Invalid base sequence {bases}")
    return str(Seq(bases).reverse_complement())


def find_variant_exon(fivep: FivePrimeUtr, variant: Variant) -> Optional[int]:
    """
    Find the exon that contains the whole reference allele of a variant.

    Returns:
        Index of the exon in the UTR, or None if the variant is not in the UTR
    """
    overlaps = None
    for index, exon in enumerate(fivep.exons):
        if exon.contains(variant.chromosome, variant.pos, variant.end):
            overlaps = index
    return overlaps


def apply_variant(exon: FivePrimeUtrExon, exon_bases: str, variant: Variant) -> str:
    """Replace the reference allele of a variant in the bases of one exon."""
    offset = variant.pos - exon.start
    observed = exon_bases[offset:offset + len(variant.ref)]
    if observed != variant.ref:
        logger.warning(f"Reference allele {variant.ref} of {variant} does not match "
                       f"reference bases {observed}")
    return exon_bases[:offset] + variant.alt + exon_bases[offset + len(variant.ref):]


def splice_utr(fasta, fivep: FivePrimeUtr, variant: Variant,
               debug_mode: bool = False) -> Optional[Tuple[str, str]]:
    """
    Build the 5-prime UTR bases, after splicing, for the reference and alternate alleles.

    Args:
        fasta: Sequence store with a ``fetch_bases(chromosome, start, end)`` method
        fivep: Location of the 5-prime UTR
        variant: Variant to apply to the alternate sequence

    Returns:
        Tuple of (reference bases, alternate bases) in transcript orientation,
        or None if the variant is not inside the UTR
    """
    overlaps = find_variant_exon(fivep, variant)
    if overlaps is None:
        logger.info(f"Variant {variant} is not in the 5-prime UTR")
        return None

    ref_parts = []
    alt_parts = []
    for index, exon in enumerate(fivep.exons):
        exon_bases = fasta.fetch_bases(exon.chromosome, exon.start, exon.end).upper()
        alt_exon = apply_variant(exon, exon_bases, variant) if index == overlaps else exon_bases
        if not fivep.forward_strand:
            exon_bases = reverse_complement(exon_bases)
            alt_exon = reverse_complement(alt_exon)
        ref_parts.append(exon_bases)
        alt_parts.append(alt_exon)

    ref_bases = ''.join(ref_parts)
    alt_bases = ''.join(alt_parts)
    if debug_mode:
        logger.debug(f"Spliced {len(fivep.exons)} exons ({fivep.strand} strand): "
                     f"reference length {len(ref_bases)}, alternate length {len(alt_bases)}")
    return ref_bases, alt_bases
