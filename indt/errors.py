class IndtError(Exception):
    pass


class IndentUnderflowError(IndtError, ValueError):
    depth: int

    def __init__(self, depth: int):
        self.depth = depth

        super().__init__(f"cannot dedent below zero (depth is {depth})")
