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

from abc import ABC, abstractmethod
from libcrcengine.parameters import *
from libcrcengine.reference import *
from libcrcengine.util import *
import copy
import functools

__all__ = [
	"CrcError",
	"InvalidWidthError",
	"UnknownPresetError",
	"CrcHandle",
	"GenericCrcEngine",
	"DIRECT_TABLE_CACHE_SIZE",
	"construct_generic",
	"new",
]

class CrcError(Exception):
	pass

class InvalidWidthError(CrcError, ValueError):
	def __init__(self, width):
		super().__init__(f"Unsupported CRC width {width}. "
				 f"Supported widths are: "
				 f"{', '.join(str(w) for w in CRC_WIDTHS)}.")
		self.width = width

class UnknownPresetError(CrcError, KeyError):
	def __init__(self, name):
		super().__init__(f"Unknown CRC preset '{name}'.")
		self.name = name

	def __str__(self):
		return self.args[0]

REVERSED_BYTES = tuple(bitreverse(i, 8) for i in range(256))

def checkBuffer(buffer):
	if isinstance(buffer, str):
		raise TypeError("Strings must be encoded before processing.")
	return buffer

class CrcHandle(ABC):
	"""Common interface of all CRC engines.

	An engine holds the running CRC register of one checksum computation.
	checksum() does not finish the computation, so more data may be
	processed after reading it.
	Engines do not lock. Sharing one engine between threads
	requires external serialization.
	"""

	@property
	@abstractmethod
	def parameters(self):
		"""The (masked) CrcParameters of this engine.
		"""

	@abstractmethod
	def reset(self):
		"""Restore the register to the initial value.
		Returns self.
		"""

	@abstractmethod
	def process_bytes(self, buffer):
		"""Fold all bytes of buffer into the register.
		Returns self.
		"""

	@abstractmethod
	def checksum(self):
		"""Return the current checksum.
		"""

	@property
	def width(self):
		return self.parameters.width

	def process(self, data, start=1, end=-1):
		"""Process the bytes data[start..end].
		See substring() for the range semantics.
		"""
		return self.process_bytes(substring(checkBuffer(data), start, end))

	def __call__(self, data, start=1, end=-1):
		return self.reset().process(data, start, end).checksum()

	def digest(self):
		return self.checksum().to_bytes(self.width // 8, "big")

	def copy(self):
		return copy.copy(self)

	def __repr__(self):
		return (f"{type(self).__name__}({self.parameters.describe()}, "
			f"checksum=0x{self.checksum():X})")

DIRECT_TABLE_CACHE_SIZE = 64

@functools.lru_cache(maxsize=DIRECT_TABLE_CACHE_SIZE)
def directTable(polynomial, nrCrcBits):
	"""Get the MSB-first lookup table for polynomial.
	The most recently used tables are cached and shared by all engines.
	An engine keeps a reference to its own table, so eviction
	does not affect existing engines.
	"""
	return CrcReference.table(polynomial=polynomial,
				  nrCrcBits=nrCrcBits,
				  shiftRight=False)

class GenericCrcEngine(CrcHandle):
	"""Table driven CRC engine for arbitrary parameters.

	The register always shifts to the left (MSB first).
	Reflected input bytes are reversed before they enter the register
	and a reflected output is reversed in checksum().
	"""

	def __init__(self, parameters):
		if not parameters.isValidWidth():
			raise InvalidWidthError(parameters.width)
		self._parameters = parameters.masked()
		nrCrcBits = self._parameters.width
		self._mask = widthMask(nrCrcBits)
		self._shift = nrCrcBits - 8
		self._table = directTable(self._parameters.polynomial, nrCrcBits)
		self.reset()

	@property
	def parameters(self):
		return self._parameters

	def reset(self):
		self._register = self._parameters.initial
		return self

	def process_bytes(self, buffer):
		table = self._table
		shift = self._shift
		mask = self._mask
		crc = self._register
		if self._parameters.reflectInput:
			rev = REVERSED_BYTES
			for b in checkBuffer(buffer):
				crc = ((crc << 8) ^ table[((crc >> shift) ^ rev[b]) & 0xFF]) & mask
		else:
			for b in checkBuffer(buffer):
				crc = ((crc << 8) ^ table[((crc >> shift) ^ b) & 0xFF]) & mask
		self._register = crc
		return self

	def checksum(self):
		crc = self._register
		if self._parameters.reflectOutput:
			crc = bitreverse(crc, self._parameters.width)
		return (crc ^ self._parameters.finalXor) & self._mask

def construct_generic(parameters):
	"""Create an engine for the given CrcParameters.
	Raises InvalidWidthError for widths other than 8, 16, 24 and 32.
	"""
	return GenericCrcEngine(parameters)

def new(width, polynomial, initial=0, finalXor=0,
	reflectInput=False, reflectOutput=False):
	return construct_generic(CrcParameters(width=width,
					       polynomial=polynomial,
					       initial=initial,
					       finalXor=finalXor,
					       reflectInput=reflectInput,
					       reflectOutput=reflectOutput))
