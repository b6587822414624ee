"""
Classification of the change in uORFs between the reference and alternate alleles.
"""
import logging
from enum import Enum
from typing import NamedTuple, Optional, Tuple, Union

from uorf_effect.models import Uorf, UorfType

logger = logging.getLogger(__name__)


class UorfEffect(Enum):
    NO_CHANGE = "No change"

    UORF_CREATED = "uORF_created"
    STRONGER_UORF_CREATED = "stronger_uORF_created"
    CLOSER_UORF_CREATED = "closer_uORF_created"
    LOSS_UORF = "loss_uORF"
    LOSS_WEAKER_UORF = "loss_weaker_uORF"
    LOSS_FURTHER_UORF = "loss_further_uORF"

    CDS_ELONGATED = "CDS_elongated"
    STRONGER_CDS_ELONGATED = "stronger_CDS_elongated"
    CLOSER_CDS_ELONGATED = "closer_CDS_elongated"
    LOSS_CDS_ELONGATED = "loss_CDS_elongated"
    LOSS_WEAKER_CDS_ELONGATED = "loss_weaker_CDS_elongated"
    LOSS_FURTHER_CDS_ELONGATED = "loss_further_CDS_elongated"

    OUT_OF_FRAME_OORF = "out-of-frame_oORF"
    STRONGER_OUT_OF_FRAME_OORF = "stronger_out-of-frame_oORF"
    CLOSER_OUT_OF_FRAME_OORF = "closer_out-of-frame_oORF"
    LOSS_OUT_OF_FRAME_OORF = "loss_out-of-frame_oORF"
    LOSS_WEAKER_OUT_OF_FRAME_OORF = "loss_weaker_out-of-frame_oORF"
    LOSS_FURTHER_OUT_OF_FRAME_OORF = "loss_further_out-of-frame_oORF"

    @property
    def is_loss(self) -> bool:
        """True if the change weakens or removes a uORF present in the reference."""
        return self.value.startswith("loss_")


class ComparisonLabels(NamedTuple):
    """Effects for a reference and alternate ORF of the same type."""
    stronger: UorfEffect
    weaker: UorfEffect
    closer: UorfEffect
    further: UorfEffect


OUT_OF_FRAME_COMPARISON = ComparisonLabels(
    UorfEffect.STRONGER_OUT_OF_FRAME_OORF,
    UorfEffect.LOSS_WEAKER_OUT_OF_FRAME_OORF,
    UorfEffect.CLOSER_OUT_OF_FRAME_OORF,
    UorfEffect.LOSS_FURTHER_OUT_OF_FRAME_OORF,
)
CDS_ELONGATED_COMPARISON = ComparisonLabels(
    UorfEffect.STRONGER_CDS_ELONGATED,
    UorfEffect.LOSS_WEAKER_CDS_ELONGATED,
    UorfEffect.CLOSER_CDS_ELONGATED,
    UorfEffect.LOSS_FURTHER_CDS_ELONGATED,
)
UORF_COMPARISON = ComparisonLabels(
    UorfEffect.STRONGER_UORF_CREATED,
    UorfEffect.LOSS_WEAKER_UORF,
    UorfEffect.CLOSER_UORF_CREATED,
    UorfEffect.LOSS_FURTHER_UORF,
)

# (reference ORF type, alternate ORF type) -> effect; None means no ORF
EFFECT_TABLE = {
    (None, UorfType.FRAMESHIFT): UorfEffect.OUT_OF_FRAME_OORF,
    (None, UorfType.EXTENDING): UorfEffect.CDS_ELONGATED,
    (None, UorfType.NON_OVERLAPPING): UorfEffect.UORF_CREATED,

    (UorfType.FRAMESHIFT, None): UorfEffect.LOSS_OUT_OF_FRAME_OORF,
    (UorfType.FRAMESHIFT, UorfType.FRAMESHIFT): OUT_OF_FRAME_COMPARISON,
    (UorfType.FRAMESHIFT, UorfType.EXTENDING): UorfEffect.LOSS_OUT_OF_FRAME_OORF,
    (UorfType.FRAMESHIFT, UorfType.NON_OVERLAPPING): UorfEffect.LOSS_OUT_OF_FRAME_OORF,

    (UorfType.EXTENDING, None): UorfEffect.LOSS_CDS_ELONGATED,
    (UorfType.EXTENDING, UorfType.FRAMESHIFT): UorfEffect.OUT_OF_FRAME_OORF,
    (UorfType.EXTENDING, UorfType.EXTENDING): CDS_ELONGATED_COMPARISON,
    (UorfType.EXTENDING, UorfType.NON_OVERLAPPING): UorfEffect.LOSS_CDS_ELONGATED,

    (UorfType.NON_OVERLAPPING, None): UorfEffect.LOSS_UORF,
    (UorfType.NON_OVERLAPPING, UorfType.FRAMESHIFT): UorfEffect.OUT_OF_FRAME_OORF,
    (UorfType.NON_OVERLAPPING, UorfType.EXTENDING): UorfEffect.CDS_ELONGATED,
    (UorfType.NON_OVERLAPPING, UorfType.NON_OVERLAPPING): UORF_COMPARISON,
}


def compare_same_type(ref_uorf: Uorf, alt_uorf: Uorf, length_change: int,
                      labels: ComparisonLabels) -> UorfEffect:
    """
    Compare two ORFs of the same type by start codon strength, then by distance.

    Distances within ``length_change`` of each other count as unchanged, since
    an indel moves everything upstream of it by its own length.
    """
    if alt_uorf.strength > ref_uorf.strength:
        return labels.stronger
    if alt_uorf.strength < ref_uorf.strength:
        return labels.weaker
    if alt_uorf.distance < ref_uorf.distance - length_change:
        return labels.closer
    if alt_uorf.distance > ref_uorf.distance + length_change:
        return labels.further
    return UorfEffect.NO_CHANGE


def classify_effect(ref_uorf: Optional[Uorf], alt_uorf: Optional[Uorf],
                    length_change: int) -> Optional[Tuple[UorfEffect, bool]]:
    """
    Work out the consequence of a variant from the most damaging ORF of each allele.

    Args:
        ref_uorf: Most damaging ORF in the reference UTR, if any
        alt_uorf: Most damaging ORF in the alternate UTR, if any
        length_change: Size of the indel

    Returns:
        Tuple of (effect, loss) or None if neither allele has an ORF
    """
    if ref_uorf is None and alt_uorf is None:
        return None
    key = (ref_uorf.type if ref_uorf else None, alt_uorf.type if alt_uorf else None)
    rule: Union[UorfEffect, ComparisonLabels] = EFFECT_TABLE[key]
    if isinstance(rule, ComparisonLabels):
        effect = compare_same_type(ref_uorf, alt_uorf, length_change, rule)
    else:
        effect = rule
    logger.debug(f"Reference {ref_uorf} vs alternate {alt_uorf} (length change {length_change}): {effect.value}")
    return effect, effect.is_loss
