import unittest
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction

class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
        self.cpu = Chip8Cpu(self.bus, rng_seed=1234)
        self.state = self.cpu.get_state()

    def _execute(self, word):
        self.state.pc = 0x0200
        op = decode_opcode(word)
        self.state.pc += op.length
        execute_instruction(op, self.state, self.bus)

    def test_add_vx_nn(self):
        self.state.v[3] = 0x10
        # ADD V3, #$20
        self._execute(0x7320)
        self.assertEqual(self.state.v[3], 0x30)

    def test_add_vx_nn_wraps_without_flag(self):
        self.state.v[3] = 0xFF
        self.state.vf = 0x55
        self._execute(0x7302)
        self.assertEqual(self.state.v[3], 0x01)
        self.assertEqual(self.state.vf, 0x55) # VF is untouched

    def test_or_and_xor(self):
        self.state.v[1] = 0b10101010
        self.state.v[2] = 0b11001100
        self._execute(0x8121) # OR
        self.assertEqual(self.state.v[1], 0b11101110)

        self.state.v[1] = 0b10101010
        self._execute(0x8122) # AND
        self.assertEqual(self.state.v[1], 0b10001000)

        self.state.v[1] = 0b10101010
        self._execute(0x8123) # XOR
        self.assertEqual(self.state.v[1], 0b01100110)

    def test_add_vx_vy_no_carry(self):
        self.state.v[0] = 0x10
        self.state.v[1] = 0x20
        self._execute(0x8014)
        self.assertEqual(self.state.v[0], 0x30)
        self.assertEqual(self.state.vf, 0)

    def test_add_vx_vy_carry(self):
        for a, b in [(0xFF, 0x01), (0x80, 0x80), (0xC8, 0x64), (0xFF, 0xFF)]:
            self.state.v[0] = a
            self.state.v[1] = b
            self._execute(0x8014)
            self.assertEqual(self.state.v[0], (a + b) % 256)
            self.assertEqual(self.state.vf, 1)

    def test_add_vx_vy_boundary(self):
        # 0xFE + 0x01 = 0xFF: no carry
        self.state.v[0] = 0xFE
        self.state.v[1] = 0x01
        self._execute(0x8014)
        self.assertEqual(self.state.v[0], 0xFF)
        self.assertEqual(self.state.vf, 0)

    def test_sub_no_borrow(self):
        self.state.v[4] = 0x30
        self.state.v[5] = 0x10
        self._execute(0x8455)
        self.assertEqual(self.state.v[4], 0x20)
        self.assertEqual(self.state.vf, 1)

    def test_sub_equal_operands_sets_flag(self):
        self.state.v[4] = 0x42
        self.state.v[5] = 0x42
        self._execute(0x8455)
        self.assertEqual(self.state.v[4], 0x00)
        self.assertEqual(self.state.vf, 1)

    def test_sub_borrow(self):
        self.state.v[4] = 0x05
        self.state.v[5] = 0x10
        self._execute(0x8455)
        self.assertEqual(self.state.v[4], 0xF5) # (5 - 16) mod 256
        self.assertEqual(self.state.vf, 0)

    def test_subn(self):
        self.state.v[4] = 0x10
        self.state.v[5] = 0x30
        self._execute(0x8457)
        self.assertEqual(self.state.v[4], 0x20)
        self.assertEqual(self.state.vf, 1)

        self.state.v[4] = 0x30
        self.state.v[5] = 0x10
        self._execute(0x8457)
        self.assertEqual(self.state.v[4], 0xE0)
        self.assertEqual(self.state.vf, 0)

    def test_shr(self):
        self.state.v[6] = 0b00000101
        self.state.v[7] = 0xAA
        self._execute(0x8676)
        self.assertEqual(self.state.v[6], 0b00000010)
        self.assertEqual(self.state.vf, 1)
        self.assertEqual(self.state.v[7], 0xAA) # Vy is not used

        self._execute(0x8676)
        self.assertEqual(self.state.v[6], 0b00000001)
        self.assertEqual(self.state.vf, 0)

    def test_shl(self):
        self.state.v[6] = 0b10000001
        self._execute(0x867E)
        self.assertEqual(self.state.v[6], 0b00000010)
        self.assertEqual(self.state.vf, 1)

        self._execute(0x867E)
        self.assertEqual(self.state.v[6], 0b00000100)
        self.assertEqual(self.state.vf, 0)

    def test_flag_register_as_destination_keeps_flag(self):
        # ADD VF, V1: result is written first, then the carry flag overwrites VF
        self.state.vf = 0xFF
        self.state.v[1] = 0x02
        self._execute(0x8F14)
        self.assertEqual(self.state.vf, 1)

    def test_rnd_masks_value(self):
        for _ in range(50):
            self._execute(0xC00F)
            self.assertLessEqual(self.state.v[0], 0x0F)
        self._execute(0xC000)
        self.assertEqual(self.state.v[0], 0)

    def test_rnd_reproducible_with_seed(self):
        values = []
        for _ in range(8):
            self._execute(0xC1FF)
            values.append(self.state.v[1])

        other_bus = Bus()
        other_bus.register_device(0x0000, 0x0FFF, RAM(0x1000))
        other = Chip8Cpu(other_bus, rng_seed=1234)
        other_state = other.get_state()
        other_values = []
        for _ in range(8):
            op = decode_opcode(0xC1FF)
            execute_instruction(op, other_state, other_bus)
            other_values.append(other_state.v[1])
        self.assertEqual(values, other_values)

    def test_add_i_vx(self):
        self.state.i = 0x0300
        self.state.v[2] = 0x10
        self._execute(0xF21E)
        self.assertEqual(self.state.i, 0x0310)

    def test_add_i_vx_wraps_16bit(self):
        self.state.i = 0xFFFF
        self.state.v[2] = 0x02
        self.state.vf = 0
        self._execute(0xF21E)
        self.assertEqual(self.state.i, 0x0001)
        self.assertEqual(self.state.vf, 0)

if __name__ == '__main__':
    unittest.main()
