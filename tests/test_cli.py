#!/usr/bin/env python3
"""
test_cli.py
-----------
Tests for the indexed FASTA reader, the text report and the command line.

Run:
    python -m pytest tests/test_cli.py -v
"""

import os
import shutil
import tempfile
import unittest

import pandas as pd
import pysam
from click.testing import CliRunner

from fake_reference import FORWARD_UTR_BASES, REVERSE_UTR_GENOMIC
from uorf_effect.models import Uorf, UorfResult, UorfType
from uorf_effect.pipeline import main
from uorf_effect.reference import ReferenceGenome
from uorf_effect.report import format_report, uorfs_to_dataframe

# The forward UTR occupies 10-112 of chromosome 22, the reverse UTR 5-60 of chromosome 19,
# and chromosome 5 has no start codon at all
FASTA_RECORDS = {
    '22': 'N' * 9 + FORWARD_UTR_BASES.lower() + 'NNNN',
    '19': 'NNNN' + REVERSE_UTR_GENOMIC + 'NNNN',
    '5': 'C' * 30,
}


def _write_fasta(directory):
    path = os.path.join(directory, 'reference.fa')
    with open(path, 'w') as fh:
        for name, bases in FASTA_RECORDS.items():
            fh.write(f'>{name}\n')
            for i in range(0, len(bases), 60):
                fh.write(bases[i:i + 60] + '\n')
    pysam.faidx(path)
    return path


class TestReferenceGenome(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.fasta_path = _write_fasta(self.tmp_dir)

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_fetch_is_one_based_inclusive_and_upper_case(self):
        with ReferenceGenome(self.fasta_path) as reference:
            self.assertEqual(reference.fetch_bases('22', 10, 112), FORWARD_UTR_BASES)
            self.assertEqual(reference.fetch_bases('22', 16, 18), 'ATG')

    def test_unknown_chromosome(self):
        with ReferenceGenome(self.fasta_path) as reference:
            with self.assertRaises((KeyError, ValueError)):
                reference.fetch_bases('7', 1, 10)

    def test_range_past_end(self):
        with ReferenceGenome(self.fasta_path) as reference:
            with self.assertRaises(ValueError):
                reference.fetch_bases('19', 60, 80)


class TestReport(unittest.TestCase):

    def setUp(self):
        self.result = UorfResult(
            effect='out-of-frame_oORF',
            uorf=Uorf(98, 0, 3, UorfType.FRAMESHIFT),
            ref_uorfs=(Uorf(97, 61, 3, UorfType.NON_OVERLAPPING),),
            alt_uorfs=(Uorf(98, 0, 3, UorfType.FRAMESHIFT), Uorf(67, 61, 2, UorfType.NON_OVERLAPPING)),
            visualisations=('r0', 'a0', 'r1', 'a1', 'r2', 'a2'),
        )

    def test_report_lines(self):
        self.assertEqual(format_report(self.result), [
            'Effect: out-of-frame_oORF',
            'Start codon strength: Strong',
            'Start codon distance: 98',
            'ORF finish distance: 0',
            'uORFs in reference: [(NON_OVERLAPPING, distance: 97 to 61, Strong)]',
            'uORFs in alternate: [(FRAMESHIFT, distance: 98 to 0, Strong), '
            '(NON_OVERLAPPING, distance: 67 to 61, Medium)]',
            'Reference UTR bases, offset 0: r0',
            'Alternate UTR bases, offset 0: a0',
            'Reference UTR bases, offset 1: r1',
            'Alternate UTR bases, offset 1: a1',
            'Reference UTR bases, offset 2: r2',
            'Alternate UTR bases, offset 2: a2',
        ])

    def test_report_outside_utr(self):
        self.assertEqual(format_report(UorfResult.empty()), ['Effect: '])

    def test_dataframe(self):
        df = uorfs_to_dataframe(self.result)
        self.assertEqual(list(df['allele']), ['reference', 'alternate', 'alternate'])
        self.assertEqual(list(df['rank']), [1, 1, 2])
        self.assertEqual(list(df['type']), ['NON_OVERLAPPING', 'FRAMESHIFT', 'NON_OVERLAPPING'])
        self.assertEqual(list(df['strength_text']), ['Strong', 'Strong', 'Medium'])

    def test_empty_dataframe_has_columns(self):
        df = uorfs_to_dataframe(UorfResult.empty())
        self.assertTrue(df.empty)
        self.assertIn('stop_distance', df.columns)


class TestCommandLine(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.fasta_path = _write_fasta(self.tmp_dir)
        self.runner = CliRunner()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_forward_insertion(self):
        tsv_path = os.path.join(self.tmp_dir, 'uorfs.tsv')
        result = self.runner.invoke(main, [
            '--fasta', self.fasta_path, '--chrom', '22', '--pos', '47',
            '--ref', 'A', '--alt', 'at', '--strand', '1',
            '--exon', '10', '112', '--output-tsv', tsv_path,
        ])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('Effect: out-of-frame_oORF', result.output)
        self.assertIn('Start codon strength: Strong', result.output)
        self.assertIn('Start codon distance: 98', result.output)
        self.assertIn('ORF finish distance: 0', result.output)
        self.assertIn('uORFs in reference: [(NON_OVERLAPPING, distance: 97 to 61, Strong)]', result.output)

        df = pd.read_csv(tsv_path, sep='\t')
        self.assertEqual(len(df), 3)
        self.assertEqual(list(df['distance']), [97, 98, 67])

    def test_reverse_insertion(self):
        result = self.runner.invoke(main, [
            '-f', self.fasta_path, '-c', '19', '-p', '21',
            '-r', 'G', '-a', 'GGCGCCGCCGCCGCCGCCGCC', '--strand=-1',
            '-e', '5', '60',
        ])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('Effect: out-of-frame_oORF', result.output)
        self.assertIn('Start codon strength: Weak', result.output)
        self.assertIn('Start codon distance: 65', result.output)

    def test_variant_outside_utr(self):
        result = self.runner.invoke(main, [
            '-f', self.fasta_path, '-c', '22', '-p', '200',
            '-r', 'A', '-a', 'G', '-s', '+', '-e', '10', '112',
        ])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('Effect: \n', result.output)
        self.assertNotIn('Start codon strength', result.output)

    def test_no_uorfs_writes_header_only_tsv(self):
        tsv_path = os.path.join(self.tmp_dir, 'uorfs.tsv')
        with self.assertLogs(level='WARNING') as logs:
            result = self.runner.invoke(main, [
                '-f', self.fasta_path, '-c', '5', '-p', '10',
                '-r', 'C', '-a', 'G', '-s', '+', '-e', '1', '30',
                '--output-tsv', tsv_path,
            ])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('Effect: \n', result.output)
        self.assertIn('Reference UTR bases, offset 0: ', result.output)
        self.assertTrue(any('No uORFs found, wrote header only' in line for line in logs.output))

        df = pd.read_csv(tsv_path, sep='\t')
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), [
            'allele', 'rank', 'type', 'distance', 'stop_distance', 'strength', 'strength_text',
        ])

    def test_debug_logs_fetched_and_spliced_bases(self):
        with self.assertLogs('uorf_effect', level='DEBUG') as logs:
            result = self.runner.invoke(main, [
                '-f', self.fasta_path, '-c', '22', '-p', '47',
                '-r', 'A', '-a', 'AT', '-s', '+', '-e', '10', '112', '--debug',
            ])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(any('Fetched 22:10-112: ' + FORWARD_UTR_BASES.lower() in line for line in logs.output))
        self.assertTrue(any('Spliced 1 exons (+ strand)' in line for line in logs.output))

    def test_unknown_chromosome_fails(self):
        result = self.runner.invoke(main, [
            '-f', self.fasta_path, '-c', '7', '-p', '5',
            '-r', 'A', '-a', 'G', '-s', '+', '-e', '1', '10',
        ])
        self.assertNotEqual(result.exit_code, 0)


if __name__ == '__main__':
    unittest.main()
