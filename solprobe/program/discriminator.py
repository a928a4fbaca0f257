import hashlib

DISCRIMINATOR_SIZE = 8


def instruction_discriminator(name: str) -> bytes:
    """Returns the 8 byte tag Anchor programs use to dispatch the instruction `name`.

    :param name: The snake_case instruction name, e.g. `initialize`.
    """
    return hashlib.sha256(f'global:{name}'.encode('utf-8')).digest()[:DISCRIMINATOR_SIZE]


def account_discriminator(name: str) -> bytes:
    """Returns the 8 byte tag Anchor programs write at the start of an account of type `name`.

    :param name: The CamelCase account type name, e.g. `MyAccount`.
    """
    return hashlib.sha256(f'account:{name}'.encode('utf-8')).digest()[:DISCRIMINATOR_SIZE]
