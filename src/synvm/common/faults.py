''' Fatal machine conditions '''


class VMFault(Exception):
    ''' Base for every condition that stops the interpreter '''
    pc: int | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        if self.pc is None:
            return self.message

        return f'{self.message} (pc={self.pc})'


class InvalidOpcode(VMFault):
    pass


class InvalidOperand(VMFault):
    pass


class InvalidAddress(VMFault):
    pass


class StackUnderflow(VMFault):
    pass


class DivideByZero(VMFault):
    pass


class InputExhausted(VMFault):
    pass


class ImageError(Exception):
    ''' Program image could not be decoded or placed into memory '''
    pass
