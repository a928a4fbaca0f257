import base64
from typing import List, NamedTuple, Optional

from solprobe.keys import PublicKey, PrivateKey, ED25519_PUB_KEY_SIZE
from solprobe.solana import shortvec
from solprobe.solana.instruction import Instruction, AccountMeta

SIGNATURE_LENGTH = 64
HASH_LENGTH = 32
MAX_TX_SIZE = 1232

_EMPTY_SIGNATURE = bytes(SIGNATURE_LENGTH)


class Header(NamedTuple):
    num_required_signatures: int
    num_read_only_signed: int
    num_read_only_unsigned: int


class CompiledInstruction(NamedTuple):
    program_index: int
    accounts: bytes
    data: bytes


class Message:
    """The signed portion of a legacy Solana transaction.

    :param header: The message :class:`Header <Header>`.
    :param accounts: All accounts referenced by the message, in the order the runtime expects: writable signers,
        read-only signers, writable non-signers, read-only non-signers.
    :param recent_blockhash: The blockhash the transaction is anchored to.
    :param instructions: The instructions, with accounts replaced by indexes into `accounts`.
    """

    def __init__(self, header: Header, accounts: List[PublicKey], recent_blockhash: bytes,
                 instructions: List[CompiledInstruction]):
        self.header = header
        self.accounts = accounts
        self.recent_blockhash = recent_blockhash
        self.instructions = instructions

    def __eq__(self, other):
        if not isinstance(other, Message):
            return False

        return (self.header == other.header and
                self.accounts == other.accounts and
                self.recent_blockhash == other.recent_blockhash and
                self.instructions == other.instructions)

    @property
    def signers(self) -> List[PublicKey]:
        return self.accounts[:self.header.num_required_signatures]

    def is_writable(self, index: int) -> bool:
        h = self.header
        if index < h.num_required_signatures:
            return index < h.num_required_signatures - h.num_read_only_signed
        return index < len(self.accounts) - h.num_read_only_unsigned

    def program_key(self, index: int) -> PublicKey:
        """Returns the program invoked by the instruction at `index`.
        """
        if index >= len(self.instructions):
            raise ValueError(f"instruction doesn't exist at {index}")
        return self.accounts[self.instructions[index].program_index]

    def marshal(self) -> bytes:
        b = bytearray(self.header)

        shortvec.encode_length(b, len(self.accounts))
        for a in self.accounts:
            b.extend(a.raw)

        b.extend(self.recent_blockhash)

        shortvec.encode_length(b, len(self.instructions))
        for i in self.instructions:
            b.append(i.program_index)
            shortvec.encode_length(b, len(i.accounts))
            b.extend(i.accounts)
            shortvec.encode_length(b, len(i.data))
            b.extend(i.data)

        return bytes(b)

    @classmethod
    def unmarshal(cls, b: bytes) -> 'Message':
        if len(b) < 3:
            raise ValueError('message too short')

        header = Header(b[0], b[1], b[2])
        offset = 3

        num_accounts, n = shortvec.decode_length(b[offset:])
        offset += n
        accounts = []
        for _ in range(num_accounts):
            accounts.append(PublicKey(b[offset:offset + ED25519_PUB_KEY_SIZE]))
            offset += ED25519_PUB_KEY_SIZE

        recent_blockhash = bytes(b[offset:offset + HASH_LENGTH])
        offset += HASH_LENGTH

        num_instructions, n = shortvec.decode_length(b[offset:])
        offset += n
        instructions = []
        for idx in range(num_instructions):
            program_index = b[offset]
            offset += 1
            if program_index >= num_accounts:
                raise ValueError(f'program index out of range: {idx}:{program_index}')

            length, n = shortvec.decode_length(b[offset:])
            offset += n
            account_indexes = bytes(b[offset:offset + length])
            offset += length
            for account_index in account_indexes:
                if account_index >= num_accounts:
                    raise ValueError(f'instruction account out of range: {account_index}')

            length, n = shortvec.decode_length(b[offset:])
            offset += n
            data = bytes(b[offset:offset + length])
            offset += length

            instructions.append(CompiledInstruction(program_index, account_indexes, data))

        return cls(header, accounts, recent_blockhash, instructions)


class Transaction:
    """A legacy Solana transaction: a :class:`Message <Message>` plus one signature slot per required signer.

    :param signatures: The signatures, in the same order as the message signers.
    :param message: The :class:`Message <Message>`.
    """

    def __init__(self, signatures: List[bytes], message: Message):
        self.signatures = signatures
        self.message = message

    def __eq__(self, other):
        if not isinstance(other, Transaction):
            return False

        return (self.signatures == other.signatures and
                self.message == other.message)

    @classmethod
    def new(cls, payer: PublicKey, instructions: List[Instruction]) -> 'Transaction':
        """Compiles the instructions into an unsigned transaction with `payer` as the fee payer.

        :param payer: The account paying the transaction fee. Always the first signer.
        :param instructions: The instructions to execute, in order.
        """
        metas = [AccountMeta.new(payer, True)]
        programs = []
        for i in instructions:
            metas.extend(i.accounts)
            programs.append(i.program)

        merged = {}
        for meta in metas:
            existing = merged.get(meta.public_key)
            if existing:
                existing.is_signer |= meta.is_signer
                existing.is_writable |= meta.is_writable
            else:
                merged[meta.public_key] = AccountMeta(meta.public_key, meta.is_signer, meta.is_writable)

        # Programs not otherwise referenced are read-only and sort after every other account.
        invoked_only = set()
        for program in programs:
            if program not in merged:
                merged[program] = AccountMeta(program)
                invoked_only.add(program)

        def _rank(meta: AccountMeta) -> int:
            if meta.public_key == payer:
                return 0
            if meta.is_signer:
                return 1 if meta.is_writable else 2
            if meta.is_writable:
                return 3
            return 5 if meta.public_key in invoked_only else 4

        ordered = sorted(merged.values(), key=_rank)
        accounts = [m.public_key for m in ordered]
        header = Header(
            sum(1 for m in ordered if m.is_signer),
            sum(1 for m in ordered if m.is_signer and not m.is_writable),
            sum(1 for m in ordered if not m.is_signer and not m.is_writable),
        )

        index = {pub: idx for idx, pub in enumerate(accounts)}
        compiled = [
            CompiledInstruction(
                index[i.program],
                bytes(index[a.public_key] for a in i.accounts),
                i.data,
            ) for i in instructions
        ]

        return cls([_EMPTY_SIGNATURE] * header.num_required_signatures,
                   Message(header, accounts, bytes(HASH_LENGTH), compiled))

    @classmethod
    def unmarshal(cls, b: bytes) -> 'Transaction':
        num_signatures, offset = shortvec.decode_length(b)

        signatures = []
        for _ in range(num_signatures):
            signatures.append(bytes(b[offset:offset + SIGNATURE_LENGTH]))
            offset += SIGNATURE_LENGTH

        return cls(signatures, Message.unmarshal(b[offset:]))

    def get_signature(self) -> Optional[bytes]:
        """Returns the first (payer) signature, which is also the transaction id.

        :return: The signature, if present, or None
        """
        if self.signatures and self.signatures[0] != _EMPTY_SIGNATURE:
            return self.signatures[0]
        return None

    def set_blockhash(self, blockhash: bytes):
        if len(blockhash) != HASH_LENGTH:
            raise ValueError(f'blockhash must be {HASH_LENGTH} bytes')
        self.message.recent_blockhash = blockhash

    def missing_signers(self) -> List[PublicKey]:
        """Returns the required signers that haven't signed yet.
        """
        return [pub for pub, sig in zip(self.message.signers, self.signatures) if sig == _EMPTY_SIGNATURE]

    def sign(self, signers: List[PrivateKey]):
        """Signs the message with each of the provided keys.

        :param signers: The keys to sign with. Each must be a required signer of the message.
        """
        message_bytes = self.message.marshal()
        required = self.message.signers
        for s in signers:
            pub = s.public_key
            if pub not in required:
                raise ValueError(f'signing account {pub.to_base58()} is not in the list of signers')

            self.signatures[required.index(pub)] = s.sign(message_bytes)

    def marshal(self) -> bytes:
        b = bytearray()
        shortvec.encode_length(b, len(self.signatures))
        for s in self.signatures:
            b.extend(s)
        b.extend(self.message.marshal())

        if len(b) > MAX_TX_SIZE:
            raise ValueError(f'transaction exceeds the maximum size of {MAX_TX_SIZE} bytes: {len(b)}')

        return bytes(b)

    def to_base64(self) -> str:
        return base64.b64encode(self.marshal()).decode('utf-8')
