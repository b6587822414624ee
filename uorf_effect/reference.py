"""
Access to reference genome bases.
"""
import logging

import pysam

logger = logging.getLogger(__name__)


class ReferenceGenome:
    """
    Reads bases from an indexed FASTA file.

    Positions are 1-based and inclusive, matching VCF and GTF conventions.
    Anything with a ``fetch_bases(chromosome, start, end)`` method can be
    used in place of this class.
    """

    def __init__(self, fasta_file: str, debug_mode: bool = False):
        self.fasta_file = fasta_file
        self.debug_mode = debug_mode
        self.fasta = pysam.FastaFile(fasta_file)

    def fetch_bases(self, chromosome: str, start: int, end: int) -> str:
        # pysam works in 0-based half-open coordinates
        bases = self.fasta.fetch(chromosome, start - 1, end)
        if len(bases) != end - start + 1:
            raise ValueError(f"Requested {chromosome}:{start}-{end} but only {len(bases)} bases "
                             f"are available in {self.fasta_file}")
        if self.debug_mode:
            logger.debug(f"Fetched {chromosome}:{start}-{end}: {bases}")
        return bases.upper()

    def close(self) -> None:
        self.fasta.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
