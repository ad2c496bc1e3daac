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
"""Single source of truth for the Origen version.

The version is held as a structured descriptor built from the literal
constants below and rendered into the dotted string used by:
- Package metadata (pyproject.toml)
- The CLI ``--version`` flag
- The startup log banner
- The ``/healthz`` and ``/version`` endpoints

To bump the version:
1. Update MAJOR, MINOR or BUGFIX in this file
2. Set DEV to an integer for a pre-release build, or None for a release
3. Update the version in pyproject.toml to match
4. Tag the release in git
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

MAJOR = 0
MINOR = 7
BUGFIX = 47
DEV = None


class VersionDescriptor(BaseModel):
    """Immutable major/minor/bugfix version with an optional dev iteration.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        bugfix: Bugfix version number.
        dev_iteration: Development iteration of a pre-release build.
            None marks a release build.
    """

    model_config = ConfigDict(frozen=True)

    major: NonNegativeInt = Field(..., description="Major version number")
    minor: NonNegativeInt = Field(..., description="Minor version number")
    bugfix: NonNegativeInt = Field(..., description="Bugfix version number")
    dev_iteration: NonNegativeInt | None = Field(
        default=None,
        description="Development iteration; None for a release build",
    )

    @property
    def is_release(self) -> bool:
        """Check if this descriptor names a release build."""
        return self.dev_iteration is None

    def render(self) -> str:
        """Render the descriptor as a dotted version string.

        Returns:
            ``"{major}.{minor}.{bugfix}"``, followed by ``".pre{dev_iteration}"``
            when a development iteration is set.
        """
        version = f"{self.major}.{self.minor}.{self.bugfix}"
        if self.dev_iteration is not None:
            version += f".pre{self.dev_iteration}"
        return version

    def to_dict(self) -> dict[str, Any]:
        """Return the descriptor fields together with the rendered string."""
        return {
            "version": self.render(),
            "major": self.major,
            "minor": self.minor,
            "bugfix": self.bugfix,
            "dev_iteration": self.dev_iteration,
            "release": self.is_release,
        }

    def __str__(self) -> str:
        return self.render()


VERSION_DESCRIPTOR = VersionDescriptor(
    major=MAJOR,
    minor=MINOR,
    bugfix=BUGFIX,
    dev_iteration=DEV,
)

__version__ = VERSION_DESCRIPTOR.render()
