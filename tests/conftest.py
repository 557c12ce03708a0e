"""Shared fixtures for ElfScope tests."""

import pytest

from tests.elf_builder import build_sample


VARIANTS = [(32, "<"), (32, ">"), (64, "<"), (64, ">")]
VARIANT_IDS = ["elf32-le", "elf32-be", "elf64-le", "elf64-be"]


@pytest.fixture
def sample_elf() -> bytes:
    return build_sample()


@pytest.fixture(params=VARIANTS, ids=VARIANT_IDS)
def variant(request):
    """``(bits, byte_order)`` for every class and byte order combination."""
    return request.param


@pytest.fixture
def sample_path(tmp_path, sample_elf):
    path = tmp_path / "sample.elf"
    path.write_bytes(sample_elf)
    return path
