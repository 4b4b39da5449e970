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

from abc import abstractmethod
from libcrcengine.engine import *
from libcrcengine.engine import checkBuffer, directTable
from libcrcengine.parameters import *
from libcrcengine.reference import *
from libcrcengine.util import *

__all__ = [
	"PresetCrcEngine",
	"ReflectedPresetEngine",
	"DirectPresetEngine",
	"Crc16Engine",
	"CcittEngine",
	"XmodemEngine",
	"Crc32Engine",
	"PRESET_ENGINES",
	"construct_preset",
]

class PresetCrcEngine(CrcHandle):
	"""Base class of the engines with fixed parameters.

	Each concrete preset sets NAME. Its parameters are taken from
	CRC_PARAMETERS and its lookup table is built once, when the class
	is created. The table is shared read-only by all instances.
	"""

	NAME = None
	PARAMETERS = None
	TABLE = None

	def __init_subclass__(cls, **kwargs):
		super().__init_subclass__(**kwargs)
		if cls.NAME is not None:
			parameters = CRC_PARAMETERS[cls.NAME].masked()
			cls.PARAMETERS = parameters
			cls.TABLE = cls.buildTable(parameters)
			cls._mask = widthMask(parameters.width)
			cls._shift = parameters.width - 8

	@classmethod
	@abstractmethod
	def buildTable(cls, parameters):
		"""Build the lookup table for parameters.
		Raises CrcError if the parameters do not fit this algorithm.
		"""

	def __init__(self):
		self.reset()

	@property
	def parameters(self):
		return self.PARAMETERS

class ReflectedPresetEngine(PresetCrcEngine):
	"""Preset with reflected input and reflected output.

	The register is kept in reflected bit order and shifts to the right.
	That removes all bit reversal from the byte loop and from checksum().
	"""

	@classmethod
	def buildTable(cls, parameters):
		if not (parameters.reflectInput and parameters.reflectOutput):
			raise CrcError(f"Preset '{cls.NAME}' does not reflect input and output.")
		nrCrcBits = parameters.width
		return CrcReference.table(polynomial=bitreverse(parameters.polynomial, nrCrcBits),
					  nrCrcBits=nrCrcBits,
					  shiftRight=True)

	def reset(self):
		self._register = bitreverse(self.PARAMETERS.initial, self.PARAMETERS.width)
		return self

	def process_bytes(self, buffer):
		table = self.TABLE
		crc = self._register
		for b in checkBuffer(buffer):
			crc = (crc >> 8) ^ table[(crc ^ b) & 0xFF]
		self._register = crc
		return self

	def checksum(self):
		return self._register ^ self.PARAMETERS.finalXor

class DirectPresetEngine(PresetCrcEngine):
	"""Preset without any reflection. The register shifts to the left.
	"""

	@classmethod
	def buildTable(cls, parameters):
		if parameters.reflectInput or parameters.reflectOutput:
			raise CrcError(f"Preset '{cls.NAME}' reflects input or output.")
		return directTable(parameters.polynomial, parameters.width)

	def reset(self):
		self._register = self.PARAMETERS.initial
		return self

	def process_bytes(self, buffer):
		table = self.TABLE
		shift = self._shift
		mask = self._mask
		crc = self._register
		for b in checkBuffer(buffer):
			crc = ((crc << 8) ^ table[((crc >> shift) ^ b) & 0xFF]) & mask
		self._register = crc
		return self

	def checksum(self):
		return self._register ^ self.PARAMETERS.finalXor

class Crc16Engine(ReflectedPresetEngine):
	NAME = "crc16"

class CcittEngine(DirectPresetEngine):
	NAME = "ccitt"

class XmodemEngine(ReflectedPresetEngine):
	NAME = "xmodem"

class Crc32Engine(ReflectedPresetEngine):
	NAME = "crc32"

PRESET_ENGINES = {
	engine.NAME : engine
	for engine in (Crc16Engine, CcittEngine, XmodemEngine, Crc32Engine)
}

def construct_preset(name):
	"""Create the engine for one of the named presets.
	"""
	try:
		engine = PRESET_ENGINES[name]
	except KeyError:
		raise UnknownPresetError(name)
	return engine()
