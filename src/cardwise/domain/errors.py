class InvalidInputError(ValueError):
    pass
