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
"""Tests for the command line interface."""

import json
from unittest.mock import patch

import pytest

from origen_version.cli import main
from origen_version.version import VersionDescriptor


class TestVersionFlag:
    """Tests for --version."""

    def test_version_flag_prints_version_and_exits(self, capsys) -> None:
        """Test that --version prints the program name and version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "origen-version 0.7.47"

    def test_version_flag_uses_injected_descriptor(self, capsys) -> None:
        """Test that --version reports the descriptor passed in."""
        descriptor = VersionDescriptor(major=0, minor=7, bugfix=48, dev_iteration=1)

        with pytest.raises(SystemExit):
            main(["--version"], descriptor=descriptor)

        assert capsys.readouterr().out.strip() == "origen-version 0.7.48.pre1"


class TestShowCommand:
    """Tests for the show command."""

    def test_show_prints_rendered_version(self, capsys) -> None:
        """Test that show prints the rendered version string."""
        assert main(["show"]) == 0
        assert capsys.readouterr().out == "0.7.47\n"

    def test_show_json_prints_descriptor(self, capsys) -> None:
        """Test that show --json prints every descriptor field."""
        descriptor = VersionDescriptor(major=1, minor=0, bugfix=2, dev_iteration=4)

        assert main(["show", "--json"], descriptor=descriptor) == 0

        data = json.loads(capsys.readouterr().out)
        assert data == descriptor.to_dict()


class TestServeCommand:
    """Tests for the serve command."""

    def test_serve_starts_service(self) -> None:
        """Test that serve delegates to the uvicorn entrypoint."""
        with patch("origen_version.app.main") as serve_main:
            assert main(["serve"]) == 0

        serve_main.assert_called_once_with()


class TestNoCommand:
    """Tests for running without a command."""

    def test_no_command_prints_help(self, capsys) -> None:
        """Test that running with no command prints help and returns 1."""
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_unknown_command_exits_with_usage_error(self) -> None:
        """Test that an unknown command is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["bump"])

        assert exc_info.value.code == 2
