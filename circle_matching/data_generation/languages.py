# circle_matching/data_generation/languages.py
from typing import List
from ..config import DEFAULT_LANGUAGES

def get_default_languages() -> List[str]:
    return list(DEFAULT_LANGUAGES)
