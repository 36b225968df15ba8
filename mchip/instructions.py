#!/usr/bin/env python3

"""
Instruction Decoder

Turns a fetched 16-bit opcode into an Instruction: one of a closed set of
operation kinds (Op), plus every operand field the opcode carries.  The CPU
then dispatches once on the kind.  Keeping decode apart from execute means
either can be checked on its own.

Operand fields are always in the same opcode position, whichever instruction
they belong to:

    op  = first nibble       x   = second nibble (register)
    y   = third nibble       n   = fourth nibble
    nn  = low byte           nnn = low 12 bits (address)

Families are looked up the same way as a hardware decoder would: first by the
top nibble, then (for shared families) by the opcode under a family mask.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple
from enum import IntEnum


class Op(IntEnum):
    UNKNOWN = 0
    CLS = 1      # 00E0
    RET = 2      # 00EE
    JP = 3       # 1nnn
    CALL = 4     # 2nnn
    SE_BYTE = 5  # 3xnn
    SNE_BYTE = 6  # 4xnn
    SE_REG = 7   # 5xy0
    LD_BYTE = 8  # 6xnn
    ADD_BYTE = 9  # 7xnn
    LD_REG = 10  # 8xy0
    OR = 11      # 8xy1
    AND = 12     # 8xy2
    XOR = 13     # 8xy3
    ADD_REG = 14  # 8xy4
    SUB = 15     # 8xy5
    SHR = 16     # 8xy6
    SUBN = 17    # 8xy7
    SHL = 18     # 8xyE
    SNE_REG = 19  # 9xy0
    LD_I = 20    # Annn
    JP_V0 = 21   # Bnnn
    RND = 22     # Cxnn
    DRW = 23     # Dxyn
    SKP = 24     # Ex9E
    SKNP = 25    # ExA1
    LD_VX_DT = 26  # Fx07
    LD_VX_K = 27   # Fx0A
    LD_DT_VX = 28  # Fx15
    LD_ST_VX = 29  # Fx18
    ADD_I = 30   # Fx1E
    LD_F = 31    # Fx29
    LD_B = 32    # Fx33
    LD_MEM_VX = 33  # Fx55
    LD_VX_MEM = 34  # Fx65


Instruction = namedtuple("Instruction", ["op", "opcode", "x", "y", "n", "nn", "nnn"])

# Families decoded by their first nibble alone
NIBBLE_OPS = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_BYTE,
    0x4: Op.SNE_BYTE,
    0x6: Op.LD_BYTE,
    0x7: Op.ADD_BYTE,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW
}

# Families sharing a first nibble, and the bitmask which separates their members
FAMILY_MASKS = {
    0x0: 0xFFFF,  # Exact match
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

MASKED_OPS = {
    # Instructions beginning with nibble 0x0, bitmask 0xFFFF
    0x00E0: Op.CLS,
    0x00EE: Op.RET,
    # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
    0x5000: Op.SE_REG,
    0x8000: Op.LD_REG,
    0x8001: Op.OR,
    0x8002: Op.AND,
    0x8003: Op.XOR,
    0x8004: Op.ADD_REG,
    0x8005: Op.SUB,
    0x8006: Op.SHR,
    0x8007: Op.SUBN,
    0x800E: Op.SHL,
    0x9000: Op.SNE_REG,
    # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
    0xE09E: Op.SKP,
    0xE0A1: Op.SKNP,
    0xF007: Op.LD_VX_DT,
    0xF00A: Op.LD_VX_K,
    0xF015: Op.LD_DT_VX,
    0xF018: Op.LD_ST_VX,
    0xF01E: Op.ADD_I,
    0xF029: Op.LD_F,
    0xF033: Op.LD_B,
    0xF055: Op.LD_MEM_VX,
    0xF065: Op.LD_VX_MEM
}

# Assembly-style names, used for debug traces
MNEMONICS = {
    Op.UNKNOWN: "???",
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP 0x{nnn:03x}",
    Op.CALL: "CALL 0x{nnn:03x}",
    Op.SE_BYTE: "SE V{x:01x}, 0x{nn:02x}",
    Op.SNE_BYTE: "SNE V{x:01x}, 0x{nn:02x}",
    Op.SE_REG: "SE V{x:01x}, V{y:01x}",
    Op.LD_BYTE: "LD V{x:01x}, 0x{nn:02x}",
    Op.ADD_BYTE: "ADD V{x:01x}, 0x{nn:02x}",
    Op.LD_REG: "LD V{x:01x}, V{y:01x}",
    Op.OR: "OR V{x:01x}, V{y:01x}",
    Op.AND: "AND V{x:01x}, V{y:01x}",
    Op.XOR: "XOR V{x:01x}, V{y:01x}",
    Op.ADD_REG: "ADD V{x:01x}, V{y:01x}",
    Op.SUB: "SUB V{x:01x}, V{y:01x}",
    Op.SHR: "SHR V{x:01x}, V{y:01x}",
    Op.SUBN: "SUBN V{x:01x}, V{y:01x}",
    Op.SHL: "SHL V{x:01x}, V{y:01x}",
    Op.SNE_REG: "SNE V{x:01x}, V{y:01x}",
    Op.LD_I: "LD I, 0x{nnn:03x}",
    Op.JP_V0: "JP V0, 0x{nnn:03x}",
    Op.RND: "RND V{x:01x}, 0x{nn:02x}",
    Op.DRW: "DRW V{x:01x}, V{y:01x}, 0x{n:01x}",
    Op.SKP: "SKP V{x:01x}",
    Op.SKNP: "SKNP V{x:01x}",
    Op.LD_VX_DT: "LD V{x:01x}, DT",
    Op.LD_VX_K: "LD V{x:01x}, K",
    Op.LD_DT_VX: "LD DT, V{x:01x}",
    Op.LD_ST_VX: "LD ST, V{x:01x}",
    Op.ADD_I: "ADD I, V{x:01x}",
    Op.LD_F: "LD F, V{x:01x}",
    Op.LD_B: "LD B, V{x:01x}",
    Op.LD_MEM_VX: "LD [I], V{x:01x}",
    Op.LD_VX_MEM: "LD V{x:01x}, [I]"
}


def decode(opcode):
    nibble = (opcode & 0xF000) >> 12
    op = NIBBLE_OPS.get(nibble)

    if op is None:
        op = MASKED_OPS.get(opcode & FAMILY_MASKS[nibble], Op.UNKNOWN)

    return Instruction(
        op, opcode, (opcode & 0xF00) >> 8, (opcode & 0xF0) >> 4, opcode & 0xF, opcode & 0xFF, opcode & 0xFFF
    )


def disassemble(instruction):
    return MNEMONICS[instruction.op].format(**instruction._asdict())
