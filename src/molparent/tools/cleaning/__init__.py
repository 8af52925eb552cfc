# Standardization tools exports
from .mol_cleaning import get_all_standardization_tools

__all__ = ['get_all_standardization_tools']
