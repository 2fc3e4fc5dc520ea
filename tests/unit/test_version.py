from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import re

from pysatl_particles import __version__


def test_version_pep440() -> None:
    assert re.match(
        r"^\d+!\d+(\.\d+)*([abc]|rc)?\d*(\.post\d+)?(\.dev\d+)?$|^\d+(\.\d+)*([abc]|rc)?\d*(\.post\d+)?(\.dev\d+)?$",
        __version__,
    )


def test_public_names_resolve() -> None:
    import pysatl_particles

    missing = [name for name in pysatl_particles.__all__ if not hasattr(pysatl_particles, name)]
    assert missing == []
    assert len(set(pysatl_particles.__all__)) == len(pysatl_particles.__all__)
