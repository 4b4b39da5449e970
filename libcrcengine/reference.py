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

__all__ = [
	"CrcReference",
]

from typing import Iterable
from libcrcengine.util import *

class CrcReference(object):
	"""Generic bitwise CRC reference implementation.
	This is slow, but it is the definition every engine is checked against.
	"""

	@classmethod
	def crc(cls,
		crc: int,
		data: int,
		polynomial: int,
		nrCrcBits: int,
		nrDataBits: int = 8,
		shiftRight: bool = False):

		crcMask = widthMask(nrCrcBits)
		msb = 1 << (nrCrcBits - 1)
		lsb = 1
		if shiftRight:
			for i in range(nrDataBits):
				crc ^= data & 1
				data >>= 1
				if crc & lsb:
					crc = ((crc >> 1) ^ polynomial) & crcMask
				else:
					crc = (crc >> 1) & crcMask
		else:
			for i in range(nrDataBits):
				crc ^= ((data >> (nrDataBits - 1)) & 1) << (nrCrcBits - 1)
				data <<= 1
				if crc & msb:
					crc = ((crc << 1) ^ polynomial) & crcMask
				else:
					crc = (crc << 1) & crcMask
		return crc

	@classmethod
	def crcBlock(cls,
		     parameters,
		     data: Iterable):
		"""Calculate the complete checksum of the bytes in data.
		"""
		parameters = parameters.masked()
		nrCrcBits = parameters.width
		crc = parameters.initial
		for b in data:
			if parameters.reflectInput:
				b = bitreverse(b, 8)
			crc = cls.crc(crc=crc,
				      data=b,
				      polynomial=parameters.polynomial,
				      nrCrcBits=nrCrcBits)
		if parameters.reflectOutput:
			crc = bitreverse(crc, nrCrcBits)
		return (crc ^ parameters.finalXor) & widthMask(nrCrcBits)

	@classmethod
	def table(cls,
		  polynomial: int,
		  nrCrcBits: int,
		  shiftRight: bool = False):
		"""Build the 256 entry byte lookup table.
		For shiftRight the polynomial must already be reflected.
		"""
		return tuple(cls.crc(crc=0,
				     data=i,
				     polynomial=polynomial,
				     nrCrcBits=nrCrcBits,
				     shiftRight=shiftRight)
			     for i in range(256))
