"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


FLASH_ATTN_MATRIX = """\
# Prebuilt wheels

## flash-attn

### 2.8.x

| **Torch** | `CUDA` | Python | Link |
|---|:--:|---|---|
| 2.8.0 | 12.8 | 3.13 | [whl](https://example.org/fa-2.8.3-cu128-cp313.whl) |
| 2.7.1 | 12.6 | 3.12 | [whl](https://example.org/fa-2.8.3-cu126-cp312.whl) |

### 2.7.x

| Torch | CUDA | Python | Link |
|---|---|---|---|
| 2.8.0 | 12.9 | 3.12 | https://example.org/fa-2.7.4-cu129-cp312.whl |

## sageattention

| Torch | CUDA | Python | Download |
|---|---|---|---|
| 2.8.0 | 12.8 | abi3 | [wheel](https://example.org/sage-2.2.0-cu128-abi3.whl) |
"""


@pytest.fixture
def flash_attn_matrix() -> str:
    """Markdown compatibility matrix with two packages and two flash-attn release lines."""
    return FLASH_ATTN_MATRIX
