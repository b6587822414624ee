"""
Models for representing 5-prime UTRs, variants and the uORFs found in them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple


class FivePrimeUtrExon(NamedTuple):
    """The UTR section of one exon, 1-based inclusive."""
    chromosome: str
    start: int
    end: int

    def contains(self, chromosome: str, start: int, end: int) -> bool:
        return self.chromosome == chromosome and self.start <= start and self.end >= end


@dataclass(frozen=True)
class FivePrimeUtr:
    """
    Location of a 5-prime UTR, which can be spread over multiple exons.

    Exons are listed in transcription order, so on the reverse strand they
    run from the highest genomic coordinate down.
    """
    forward_strand: bool
    exons: Tuple[FivePrimeUtrExon, ...]

    @classmethod
    def from_bounds(cls, chromosome: str, forward_strand: bool,
                    bounds: List[Tuple[int, int]]) -> 'FivePrimeUtr':
        exons = tuple(FivePrimeUtrExon(chromosome, start, end) for start, end in bounds)
        return cls(forward_strand, exons)

    @property
    def strand(self) -> str:
        return '+' if self.forward_strand else '-'


class VariantType(Enum):
    """Types of variants."""
    SNP = "SNP"
    INSERTION = "INS"
    DELETION = "DEL"
    COMPLEX = "COMPLEX"


@dataclass(frozen=True)
class Variant:
    """Representation of a genomic variant."""
    chromosome: str
    pos: int
    ref: str
    alt: str

    @property
    def end(self) -> int:
        """Last reference position covered by the reference allele."""
        return self.pos + len(self.ref) - 1

    @property
    def length_change(self) -> int:
        """Size of the indel, zero for substitutions."""
        return abs(len(self.ref) - len(self.alt))

    def get_type(self) -> VariantType:
        """Determine variant type."""
        if len(self.ref) == 1 and len(self.alt) == 1:
            return VariantType.SNP
        elif len(self.ref) < len(self.alt):
            return VariantType.INSERTION
        elif len(self.ref) > len(self.alt):
            return VariantType.DELETION
        else:
            return VariantType.COMPLEX

    def __str__(self) -> str:
        return f"{self.chromosome}:{self.pos} {self.ref}>{self.alt}"


class UorfType(Enum):
    """Position of a uORF relative to the start of the main coding sequence."""
    NON_OVERLAPPING = "NON_OVERLAPPING"
    EXTENDING = "EXTENDING"
    FRAMESHIFT = "FRAMESHIFT"


STRENGTH_NAMES = {1: "Weak", 2: "Medium", 3: "Strong"}


@dataclass(frozen=True)
class Uorf:
    """
    An open reading frame found in a 5-prime UTR.

    Attributes:
        distance: bases from the start codon to the start of the gene
        stop_distance: bases between the end of the ORF and the start of the
            gene, 0 when the ORF runs into the coding sequence
        strength: start codon strength, from 1 (weak) to 3 (strong)
        type: overlap class of the ORF
    """
    distance: int
    stop_distance: int
    strength: int
    type: UorfType

    @property
    def strength_string(self) -> str:
        return STRENGTH_NAMES.get(self.strength, "Strong")

    def __str__(self) -> str:
        return f"({self.type.value}, distance: {self.distance} to {self.stop_distance}, {self.strength_string})"

    __repr__ = __str__


@dataclass(frozen=True)
class UorfResult:
    """
    Outcome of a uORF search for one variant.

    ``uorf`` is the ORF most relevant for the effect: the reference ORF that
    was weakened or removed when ``loss`` is set, otherwise the alternate ORF
    that was strengthened or created. ``visualisations`` holds six strings,
    reference and alternate alternating for frames 0, 1 and 2. Each shows the
    UTR bases split into codons, ORFs capitalised, and the strength of each
    start codon in place of the space after it.
    """
    effect: str
    loss: bool = False
    uorf: Optional[Uorf] = None
    ref_uorfs: Optional[Tuple[Uorf, ...]] = None
    alt_uorfs: Optional[Tuple[Uorf, ...]] = None
    visualisations: Optional[Tuple[str, ...]] = field(default=None)

    @classmethod
    def empty(cls, visualisations: Optional[Tuple[str, ...]] = None) -> 'UorfResult':
        return cls("", visualisations=visualisations)

    @property
    def in_scope(self) -> bool:
        """False when the variant was not inside the 5-prime UTR."""
        return self.visualisations is not None

    def visualisation(self, frame: int, alternate: bool = False) -> str:
        if self.visualisations is None:
            raise ValueError("No visualisations for a variant outside the 5-prime UTR")
        return self.visualisations[frame * 2 + (1 if alternate else 0)]
