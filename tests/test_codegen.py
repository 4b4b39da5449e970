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

from libcrcengine import *

import random
import pytest

CHECK = b"123456789"

PARAMETER_SETS = [
	CrcParameters(8, 0x07),
	CrcParameters(8, 0x31, 0x00, 0x00, True, True),
	CrcParameters(16, 0x1021, 0xFFFF),
	CrcParameters(16, 0x8005, 0xFFFF, 0x0000, True, False),
	CrcParameters(16, 0x8005, 0x1234, 0x4321, False, True),
	CrcParameters(24, 0x864CFB, 0xB704CE),
	CrcParameters(32, 0x04C11DB7, 0xFFFFFFFF, 0xFFFFFFFF, True, True),
] + list(CRC_PARAMETERS.values())

def loadPython(params, funcName="crc"):
	execEnv = {}
	exec(CrcTableGen(params).genPython(funcName=funcName), execEnv)
	def calc(data):
		crc = execEnv[f"{funcName}_update"](execEnv[f"{funcName}_INIT"], data)
		return execEnv[f"{funcName}_final"](crc)
	return calc

@pytest.mark.parametrize("params", PARAMETER_SETS)
def test_generated_python(params):
	calc = loadPython(params)
	rng = random.Random(21)
	for _ in range(16):
		data = bytes(rng.randint(0, 0xFF) for _ in range(rng.randint(0, 40)))
		assert calc(data) == CrcReference.crcBlock(params, data)

def test_generated_python_check():
	assert loadPython(CRC_PARAMETERS["crc32"], "crc32")(CHECK) == 0xCBF43926
	assert loadPython(CRC_PARAMETERS["ccitt"], "ccitt")(CHECK) == 0x29B1

def test_algorithm_form():
	assert CrcTableGen(CRC_PARAMETERS["crc32"]).reflected
	assert not CrcTableGen(CRC_PARAMETERS["ccitt"]).reflected
	assert not CrcTableGen(CrcParameters(16, 0x8005, 0, 0, True, False)).reflected

def test_table_is_shared_with_presets():
	assert CrcTableGen(CRC_PARAMETERS["crc32"]).table == Crc32Engine.TABLE
	assert CrcTableGen(CRC_PARAMETERS["ccitt"]).table == CcittEngine.TABLE

def test_invalid_width():
	with pytest.raises(InvalidWidthError):
		CrcTableGen(CrcParameters(12, 0x80F))

def test_generated_c_text():
	gen = CrcTableGen(CRC_PARAMETERS["ccitt"])
	code = gen.genC(funcName="ccitt", static=True)
	assert "#ifndef CCITT_H_" in code
	assert "#include <stdint.h>" in code
	assert "static const uint16_t ccitt_table[256] = {" in code
	assert "static uint16_t ccitt_init(void)" in code
	assert "return 0xFFFFu;" in code
	assert "ccitt_reversed" not in code
	assert code.endswith("#endif /* CCITT_H_ */")

def test_generated_c_declarations():
	gen = CrcTableGen(CrcParameters(24, 0x864CFB, 0xB704CE))
	code = gen.genC(declOnly=True, includeGuards=False, includes=False, static=True)
	assert "extern uint32_t crc_init(void);" in code
	assert "extern uint32_t crc_update(uint32_t crc, const uint8_t *data, size_t size);" in code
	assert "extern uint32_t crc_final(uint32_t crc);" in code
	assert "crc_table" not in code
	assert "#include" not in code
	assert "static" not in code

def test_generated_c_reversed_bytes():
	gen = CrcTableGen(CrcParameters(16, 0x8005, 0, 0, True, False))
	code = gen.genC()
	assert "static const uint8_t crc_reversed[256] = {" in code
	assert "crc_reversed[*data++]" in code

def compileOrSkip(params, name=None):
	cffi = pytest.importorskip("cffi")
	try:
		CrcSelfTest(params, name=name).runTests(testC=True)
	except (cffi.VerificationError, ImportError) as e:
		pytest.skip(f"C compiler not usable: {e}")

@pytest.mark.parametrize("params", PARAMETER_SETS[:7])
def test_generated_c(params):
	compileOrSkip(params)

@pytest.mark.parametrize("name", sorted(CRC_PARAMETERS.keys()))
def test_selftest_presets(name, capsys):
	CrcSelfTest(CRC_PARAMETERS[name], name=name).runTests(testC=False)
	assert f"Testing {name} " in capsys.readouterr().out

def test_selftest_generic(capsys):
	CrcSelfTest(CrcParameters(24, 0x5D6DCB, 0xFEDCBA, 0xABCDEF, True, False)).runTests(testC=False)
	assert capsys.readouterr().out.startswith("Testing width=24")
