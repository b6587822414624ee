import logging
from typing import Optional

import click

from uorf_effect.annotator import classify_effect
from uorf_effect.logger import Logger
from uorf_effect.models import FivePrimeUtr, UorfResult, Variant
from uorf_effect.orf_scanner import scan_frames
from uorf_effect.ranking import most_severe, rank_uorfs
from uorf_effect.reference import ReferenceGenome
from uorf_effect.report import format_report, uorfs_to_dataframe
from uorf_effect.transcript_sequence import splice_utr

FORWARD_STRANDS = {'1', '+1', '+'}
STRANDS = ['1', '+1', '+', '-1', '-']


def calculate_uorf_effect(fasta, fivep: Optional[FivePrimeUtr], variant: Variant,
                          debug_mode: bool = False) -> UorfResult:
    """
    Find the uORFs in the 5-prime UTR with and without a variant, then work out the difference.

    Args:
        fasta: Sequence store with a ``fetch_bases(chromosome, start, end)`` method
        fivep: Location of the 5-prime UTR
        variant: Variant to evaluate

    Returns:
        UorfResult with an empty effect if the variant is outside the UTR or
        neither allele has an ORF
    """
    if fivep is None:
        return UorfResult.empty()
    spliced = splice_utr(fasta, fivep, variant, debug_mode=debug_mode)
    if spliced is None:
        return UorfResult.empty()
    ref_bases, alt_bases = spliced
    Logger.log_utr_lengths(len(ref_bases), len(alt_bases))

    ref_frames, ref_found = scan_frames(ref_bases)
    alt_frames, alt_found = scan_frames(alt_bases)
    visualisations = tuple(frame for pair in zip(ref_frames, alt_frames) for frame in pair)

    ref_uorfs = rank_uorfs(ref_found)
    alt_uorfs = rank_uorfs(alt_found)
    Logger.log_num_ref_uorfs(len(ref_uorfs))
    Logger.log_num_alt_uorfs(len(alt_uorfs))
    ref_uorf = most_severe(ref_uorfs)
    alt_uorf = most_severe(alt_uorfs)

    classified = classify_effect(ref_uorf, alt_uorf, variant.length_change)
    if classified is None:
        Logger.log_effect(variant, "", False)
        return UorfResult.empty(visualisations)
    effect, loss = classified
    Logger.log_effect(variant, effect.value, loss)
    return UorfResult(
        effect=effect.value,
        loss=loss,
        uorf=ref_uorf if loss else alt_uorf,
        ref_uorfs=tuple(ref_uorfs),
        alt_uorfs=tuple(alt_uorfs),
        visualisations=visualisations,
    )


class UorfPipeline:
    """Evaluates variants against a reference genome FASTA."""

    def __init__(self, fasta_file: str, debug_mode: bool = False):
        self.fasta_file = fasta_file
        self.debug_mode = debug_mode
        self.reference = ReferenceGenome(fasta_file, debug_mode=debug_mode)

    def evaluate(self, fivep: FivePrimeUtr, variant: Variant) -> UorfResult:
        logging.info(f"Processing variant {variant} against {len(fivep.exons)} UTR exons "
                     f"({fivep.strand} strand)")
        return calculate_uorf_effect(self.reference, fivep, variant, debug_mode=self.debug_mode)

    def save_results(self, result: UorfResult, output_tsv: str) -> None:
        """Save the ORFs of both alleles to a TSV file."""
        results_df = uorfs_to_dataframe(result)
        results_df.to_csv(output_tsv, sep='\t', index=False)
        if results_df.empty:
            logging.warning(f"No uORFs found, wrote header only to {output_tsv}")
        else:
            logging.info(f"{len(results_df)} uORFs saved to {output_tsv}")

    def close(self) -> None:
        self.reference.close()


@click.command()
@click.option('--fasta', '-f', required=True, help='Path to indexed reference FASTA')
@click.option('--chrom', '-c', required=True, help='Chromosome of the variant')
@click.option('--pos', '-p', required=True, type=int, help='1-based position of the variant')
@click.option('--ref', '-r', 'ref_allele', required=True, help='Reference allele')
@click.option('--alt', '-a', 'alt_allele', required=True, help='Alternate allele')
@click.option('--strand', '-s', required=True, type=click.Choice(STRANDS),
              help='Strand of the gene transcript: 1 for forward, -1 for reverse')
@click.option('--exon', '-e', 'exons', required=True, multiple=True, nargs=2, type=int,
              help='Start and end (inclusive) of a 5-prime UTR exon, repeated in exon order')
@click.option('--output-tsv', help='Optional TSV file for the uORFs found in both alleles')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def main(fasta, chrom, pos, ref_allele, alt_allele, strand, exons, output_tsv, debug) -> None:
    """Calculate the change in uORFs caused by a variant in the 5-prime UTR of a gene."""
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        fivep = FivePrimeUtr.from_bounds(chrom, strand in FORWARD_STRANDS, list(exons))
        variant = Variant(chrom, pos, ref_allele.upper(), alt_allele.upper())

        pipeline = UorfPipeline(fasta, debug_mode=debug)
        try:
            result = pipeline.evaluate(fivep, variant)
            if output_tsv:
                pipeline.save_results(result, output_tsv)
        finally:
            pipeline.close()

        for line in format_report(result):
            click.echo(line)

    except Exception as e:
        logging.error(f"uORF calculation failed: {str(e)}", exc_info=True)
        raise


if __name__ == '__main__':
    main()
