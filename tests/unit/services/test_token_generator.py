import re
from unittest.mock import patch

import pytest

from authflow.app.services.token_generator import TokenGenerator
from authflow.domain.exceptions import EntropyError


def test_token_is_64_lowercase_hex_chars():
    token = TokenGenerator().generate()

    assert re.fullmatch(r"[0-9a-f]{64}", token)


def test_tokens_do_not_repeat():
    generator = TokenGenerator()

    tokens = {generator.generate() for _ in range(100)}

    assert len(tokens) == 100


def test_missing_random_source_raises_entropy_error():
    with patch("authflow.app.services.token_generator.secrets.token_hex", side_effect=NotImplementedError):
        with pytest.raises(EntropyError):
            TokenGenerator().generate()
