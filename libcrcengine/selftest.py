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

from libcrcengine.codegen import *
from libcrcengine.engine import *
from libcrcengine.parameters import *
from libcrcengine.presets import *
from libcrcengine.reference import *

__all__ = [
	"CrcSelfTest",
]

class CrcSelfTest(object):
	"""Compare all implementations of one CRC parameterization.
	"""

	NR_RUNS		= 64	# Number of random buffers
	MAX_LENGTH	= 48	# Maximum random buffer length

	def __init__(self, parameters, name=None):
		self.__params = parameters
		self.__name = name

	def __loadC(self, gen, tmpdir):
		import importlib.util
		try:
			from cffi import FFI
		except ImportError:
			raise CrcError("cffi is required for the C self-test. "
				       "Install cffi or skip the C test (--no-c-test).")
		ffibuilder = FFI()
		ffibuilder.set_source("testmod_crcengine", gen.genC(funcName="crc"))
		ffibuilder.cdef(gen.genC(funcName="crc",
					 declOnly=True,
					 includeGuards=False,
					 includes=False))
		path = ffibuilder.compile(tmpdir=tmpdir, verbose=False)
		spec = importlib.util.spec_from_file_location("testmod_crcengine", path)
		mod = importlib.util.module_from_spec(spec)
		spec.loader.exec_module(mod)
		def crc_cimpl(data):
			buf = mod.ffi.new("uint8_t[]", list(data))
			crc = mod.lib.crc_update(mod.lib.crc_init(), buf, len(data))
			return mod.lib.crc_final(crc)
		return crc_cimpl

	def __loadPython(self, gen):
		execEnv = {}
		exec(gen.genPython(funcName="crc"), execEnv)
		def crc_pyimpl(data):
			crc = execEnv["crc_update"](execEnv["crc_INIT"], data)
			return execEnv["crc_final"](crc)
		return crc_pyimpl

	def runTests(self, testC=True):
		import random
		import shutil
		import tempfile
		tmpdir = None
		try:
			rng = random.Random()
			rng.seed(424242)

			print(f"Testing{(' ' + self.__name) if self.__name else ''} "
			      f"{self.__params.describe()} ...")

			params = self.__params.masked()
			generic = construct_generic(params)
			preset = None
			if self.__name in PRESET_ENGINES:
				preset = construct_preset(self.__name)

			# Generate the table driven algorithm as Python and C code.
			gen = CrcTableGen(params)
			crc_pyimpl = self.__loadPython(gen)
			crc_cimpl = None
			if testC:
				tmpdir = tempfile.mkdtemp(prefix="crcengine_")
				crc_cimpl = self.__loadC(gen, tmpdir)

			# Compare the reference implementation to all other implementations.
			for i in range(self.NR_RUNS):
				if i == 0:
					data = b""
				elif i == 1:
					data = b"\xFF" * self.MAX_LENGTH
				else:
					data = bytes(rng.randint(0, 0xFF)
						     for _ in range(rng.randint(1, self.MAX_LENGTH)))
				results = {
					"ref" : CrcReference.crcBlock(params, data),
					"generic" : generic(data),
					"py" : crc_pyimpl(data),
				}
				split = rng.randint(0, len(data))
				generic.reset()
				generic.process_bytes(data[:split])
				generic.checksum()
				generic.process_bytes(data[split:])
				results["chunked"] = generic.checksum()
				if preset is not None:
					results["preset"] = preset(data)
				if crc_cimpl is not None:
					results["c"] = crc_cimpl(data)
				if len(set(results.values())) != 1:
					raise CrcError(
						f"Test failed: "
						f"{params.describe()}, "
						f"data={data.hex()}, " +
						", ".join(f"{k}=0x{v:X}" for k, v in results.items()))
		finally:
			if tmpdir:
				shutil.rmtree(tmpdir, ignore_errors=True)
