import logging

logger = logging.getLogger('uorf_effect')


class Logger:

	@staticmethod
	def log_utr_lengths(ref_length, alt_length):
		logger.info(f"Length of spliced 5-prime UTR: reference {ref_length}, alternate {alt_length}")

	@staticmethod
	def log_num_ref_uorfs(num_records):
		logger.info(f"Number of uORFs in reference: {num_records}")

	@staticmethod
	def log_num_alt_uorfs(num_records):
		logger.info(f"Number of uORFs in alternate: {num_records}")

	@staticmethod
	def log_effect(variant, effect, loss):
		logger.info(f"Effect of {variant.get_type().value} {variant}: {effect or 'none'} (loss: {loss})")
