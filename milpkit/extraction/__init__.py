from .extractor import extract, active, as_dict
