# ============================================================
# SPDX-License-Identifier: GPL-3.0-or-later
# This program is part of the Origen version service project.
# Copyright (C) 2026  The Origen version service authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# ============================================================
"""Allow running the CLI with ``python -m origen_version``."""

import sys

from origen_version.cli import main

if __name__ == "__main__":
    sys.exit(main())
