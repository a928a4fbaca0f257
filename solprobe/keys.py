import os
from typing import Union

import base58
from nacl import signing

ED25519_PUB_KEY_SIZE = 32
ED25519_SEED_SIZE = 32
ED25519_SECRET_KEY_SIZE = 64


class PublicKey:
    """PublicKey is a representation of an ed25519 public key, which doubles as a Solana account address.

    :param public_key: The public key, in raw bytes.
    """

    def __init__(self, public_key: bytes):
        if len(public_key) != ED25519_PUB_KEY_SIZE:
            raise ValueError(f'public key must be {ED25519_PUB_KEY_SIZE} bytes, got {len(public_key)}')

        self._verify_key = signing.VerifyKey(bytes(public_key))

    def __eq__(self, other):
        if not isinstance(other, PublicKey):
            return False

        return self._verify_key == other._verify_key

    def __hash__(self):
        return hash(self.raw)

    def __repr__(self):
        return f'{self.__class__.__name__}(' \
               f'public_key={self.to_base58()})'

    def __str__(self):
        return self.to_base58()

    @classmethod
    def from_base58(cls, address: str) -> 'PublicKey':
        """Decodes the provided base58-encoded address and returns a PublicKey object.

        :param address: the base58 encoded address
        :return: a PublicKey object.
        """
        return cls(base58.b58decode(address))

    @property
    def raw(self) -> bytes:
        """Returns the raw bytes of the public key.

        :return: bytes
        """
        return bytes(self._verify_key)

    def to_base58(self) -> str:
        """Returns the base58-encoded form of this public key.

        :return: the string base58-encoded public key
        """
        return base58.b58encode(self.raw).decode('utf-8')

    def verify(self, data: bytes, signature: bytes):
        """Verify the provided data and signature match this public key.

        :param data: The data that was signed.
        :param signature: The signature.
        :raise: :exc:`BadSignatureError <nacl.exceptions.BadSignatureError>` if the signature is invalid.
        """
        return self._verify_key.verify(data, signature)


class PrivateKey:
    """PrivateKey is a representation of an ed25519 private key. A freshly generated PrivateKey is the identity of
    an account that is about to be provisioned.

    :param private_key: The 32 byte private seed.
    """

    def __init__(self, private_key: bytes):
        if len(private_key) != ED25519_SEED_SIZE:
            raise ValueError(f'private key seed must be {ED25519_SEED_SIZE} bytes, got {len(private_key)}')

        self._signing_key = signing.SigningKey(bytes(private_key))

    def __eq__(self, other):
        if not isinstance(other, PrivateKey):
            return False

        return self._signing_key == other._signing_key

    def __repr__(self):
        # Never print the seed.
        return f'{self.__class__.__name__}(' \
               f'public_key={self.public_key.to_base58()})'

    @classmethod
    def random(cls) -> 'PrivateKey':
        """Returns a Private Key derived from a randomly generated seed.

        :return: A PrivateKey object.
        """
        return cls(os.urandom(ED25519_SEED_SIZE))

    @classmethod
    def from_base58(cls, key: str) -> 'PrivateKey':
        """Decodes the provided base58-encoded seed or 64 byte secret key and returns a PrivateKey object.

        :param key: the base58-encoded seed or secret key
        :return: a PrivateKey object.
        """
        return cls.from_secret_key(base58.b58decode(key))

    @classmethod
    def from_secret_key(cls, secret_key: Union[bytes, bytearray]) -> 'PrivateKey':
        """Parses a raw secret key. Both a bare 32 byte seed and the 64 byte `seed || public key` form written by
        solana-keygen are accepted. For the latter, the embedded public key must match the seed.

        :param secret_key: The raw secret key bytes.
        :return: A PrivateKey object.
        """
        secret_key = bytes(secret_key)
        if len(secret_key) == ED25519_SEED_SIZE:
            return cls(secret_key)

        if len(secret_key) != ED25519_SECRET_KEY_SIZE:
            raise ValueError(f'secret key must be {ED25519_SEED_SIZE} or {ED25519_SECRET_KEY_SIZE} bytes, '
                             f'got {len(secret_key)}')

        key = cls(secret_key[:ED25519_SEED_SIZE])
        if key.public_key.raw != secret_key[ED25519_SEED_SIZE:]:
            raise ValueError('secret key does not match its embedded public key')

        return key

    @classmethod
    def from_byte_list(cls, value: str) -> 'PrivateKey':
        """Parses a comma separated list of byte values, e.g. `"12,34,56,..."`, or the JSON array form
        `"[12,34,56,...]"` stored in keypair files.

        :param value: The string list of byte values.
        :return: A PrivateKey object.
        """
        stripped = value.strip().lstrip('[').rstrip(']')
        try:
            raw = bytes(int(v) for v in stripped.split(',') if v.strip())
        except ValueError as e:
            raise ValueError(f'invalid secret key byte list: {e}') from e

        return cls.from_secret_key(raw)

    @property
    def raw(self) -> bytes:
        """Returns the raw bytes of the private seed.

        :return: bytes
        """
        return bytes(self._signing_key)

    @property
    def secret_key(self) -> bytes:
        """Returns the 64 byte `seed || public key` form of this key.

        :return: bytes
        """
        return self.raw + self.public_key.raw

    @property
    def public_key(self) -> PublicKey:
        """Returns a :class:`PublicKey <PublicKey>` object corresponding to this private key.

        :return: a :class:`PublicKey <PublicKey>`
        """
        return PublicKey(bytes(self._signing_key.verify_key))

    def to_base58(self) -> str:
        """Returns the base58-encoded form of the seed.

        :return: the string base58-encoded seed.
        """
        return base58.b58encode(self.raw).decode('utf-8')

    def sign(self, data: bytes) -> bytes:
        """Sign the provided data.

        :param data: The data to sign.
        :return: The signature.
        """
        return self._signing_key.sign(data).signature
