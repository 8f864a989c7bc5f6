WORD_BITS = 15
WORD_MODULUS = 1 << WORD_BITS       # 32768, all arithmetic wraps here
WORD_MASK = WORD_MODULUS - 1        # 0x7FFF
MAX_WORD = WORD_MASK

MEMORY_SIZE = WORD_MODULUS          # cells, addresses 0..32767
PROGRAM_BASE = 0x0000               # images are loaded here, execution starts here

REGISTER_COUNT = 8
REGISTER_BASE = WORD_MODULUS        # operand 32768 is r0
REGISTER_LAST = REGISTER_BASE + REGISTER_COUNT - 1

IMAGE_WORD_MAX = 0xFFFF             # image cells are raw 16-bit words
IMAGE_WORD_SIZE = 2                 # bytes per word in binary images
