# vim: ts=8 sw=8 noexpandtab
#
#   CRC computation engine
#
#   Copyright (c) 2019-2024 Michael Buesch <m@bues.ch>
#
#   This program is free software; you can redistribute it and/or modify
#   it under the terms of the GNU General Public License as published by
#   the Free Software Foundation; either version 2 of the License, or
#   (at your option) any later version.
#
#   This program is distributed in the hope that it will be useful,
#   but WITHOUT ANY WARRANTY; without even the implied warranty of
#   MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#   GNU General Public License for more details.
#
#   You should have received a copy of the GNU General Public License along
#   with this program; if not, write to the Free Software Foundation, Inc.,
#   51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.
#

from libcrcengine.version import *
from libcrcengine.util import *
from libcrcengine.parameters import *
from libcrcengine.reference import *
from libcrcengine.engine import *
from libcrcengine.presets import *
from libcrcengine.codegen import *
from libcrcengine.selftest import *
