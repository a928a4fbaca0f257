from typing import Any, Optional

# JSON-RPC error codes returned by Solana nodes.
# Reference: https://github.com/solana-labs/solana/blob/master/rpc-client-api/src/custom_error.rs
RPC_SEND_TRANSACTION_PREFLIGHT_FAILURE = -32002
RPC_TRANSACTION_SIGNATURE_VERIFICATION_FAILURE = -32003

# SystemError::AccountAlreadyInUse
_SYSTEM_ACCOUNT_ALREADY_IN_USE = 0

_INSUFFICIENT_FUNDS = ('InsufficientFundsForFee', 'InsufficientFundsForRent', 'InsufficientFunds')
_SIGNATURE_ERRORS = ('SignatureFailure', 'MissingRequiredSignature')


class Error(Exception):
    """Base error for solprobe errors.
    """

    def __init__(self, message: Optional[str] = ''):
        self.message = message
        super().__init__(self.message)


class ConfigError(Error):
    """Raised when required configuration is missing or malformed.
    """


class TransportError(Error):
    """Raised when the network could not be reached, or replied with something that isn't a JSON-RPC response.

    :param cause: (optional) The underlying exception.
    """

    def __init__(self, message: Optional[str] = '', cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class TransactionError(Error):
    """Base error for transaction submission errors.

    :param tx_id: The id (first signature) of the transaction, if available.
    """

    def __init__(self, message: Optional[str] = '', tx_id: Optional[bytes] = None):
        super().__init__(message)
        self.tx_id = tx_id


class RejectionError(TransactionError):
    """Raised when the network or the target program rejected a transaction. The transaction definitely did not take
    effect.

    :param payload: The error reported by the network, unmodified.
    """

    def __init__(self, message: Optional[str] = '', tx_id: Optional[bytes] = None, payload: Any = None):
        super().__init__(message, tx_id=tx_id)
        self.payload = payload


class InvalidSignatureError(RejectionError):
    """Raised when the submitted transaction is missing a required signature or carries an invalid one.
    """


class InsufficientBalanceError(RejectionError):
    """Raised when the funder can't pay the fee, or an account would be left below its rent-exempt minimum.
    """


class AccountInUseError(RejectionError):
    """Raised when trying to create an account that already exists.
    """


class ProgramError(RejectionError):
    """Raised when an instruction failed inside a program.

    :param instruction_index: The index of the failed instruction.
    :param code: (optional) The custom error code returned by the program.
    """

    def __init__(self, message: Optional[str] = '', tx_id: Optional[bytes] = None, payload: Any = None,
                 instruction_index: int = -1, code: Optional[int] = None):
        super().__init__(message, tx_id=tx_id, payload=payload)
        self.instruction_index = instruction_index
        self.code = code


class TransactionTimeoutError(TransactionError):
    """Raised when a submitted transaction was not observed at the requested commitment within the configured wait.

    Unlike :class:`RejectionError <RejectionError>`, the outcome of the transaction is unknown.
    """


class AccountNotFoundError(Error):
    """Raised when an account could not be found.
    """


class CorruptAccountError(Error):
    """Raised when account data does not match the expected layout.
    """


class StateMismatchError(Error):
    """Raised when fetched account state does not equal the expected state.

    :param expected: The expected value.
    :param actual: The value that was fetched.
    """

    def __init__(self, expected: Any, actual: Any):
        super().__init__(f'expected {expected!r}, got {actual!r}')
        self.expected = expected
        self.actual = actual


def error_from_rpc(error: dict, tx_id: Optional[bytes] = None, system_instructions=()) -> RejectionError:
    """Converts a JSON-RPC error object returned by `sendTransaction` into a :class:`RejectionError
    <RejectionError>`.

    :param error: The JSON-RPC `error` member.
    :param tx_id: (optional) The id of the rejected transaction.
    :param system_instructions: (optional) Indexes of the instructions that target the system program.
    """
    code = error.get('code')
    message = error.get('message', '')
    if code == RPC_TRANSACTION_SIGNATURE_VERIFICATION_FAILURE:
        return InvalidSignatureError(message, tx_id=tx_id, payload=error)

    data = error.get('data')
    if code == RPC_SEND_TRANSACTION_PREFLIGHT_FAILURE and isinstance(data, dict) and data.get('err') is not None:
        return error_from_transaction_err(data['err'], tx_id, system_instructions, payload=error, message=message)

    return RejectionError(f'rpc error {code}: {message}', tx_id=tx_id, payload=error)


def error_from_transaction_err(
    err: Any, tx_id: Optional[bytes] = None, system_instructions=(), payload: Any = None, message: str = '',
) -> RejectionError:
    """Converts a `TransactionError` value, as found in signature statuses and simulation results, into a
    :class:`RejectionError <RejectionError>`.

    :param err: The `err` value reported by the network.
    :param tx_id: (optional) The id of the rejected transaction.
    :param system_instructions: (optional) Indexes of the instructions that target the system program.
    :param payload: (optional) The payload to attach, defaults to `err`.
    :param message: (optional) The message to use, defaults to a rendering of `err`.
    """
    payload = payload if payload is not None else err
    message = message if message else f'transaction failed: {err}'

    name = err if isinstance(err, str) else (next(iter(err)) if isinstance(err, dict) and err else None)
    if name in _INSUFFICIENT_FUNDS:
        return InsufficientBalanceError(message, tx_id=tx_id, payload=payload)
    if name in _SIGNATURE_ERRORS:
        return InvalidSignatureError(message, tx_id=tx_id, payload=payload)
    if name == 'AccountInUse':
        return AccountInUseError(message, tx_id=tx_id, payload=payload)

    if name == 'InstructionError':
        index, reason = err['InstructionError']
        if reason in _SIGNATURE_ERRORS:
            return InvalidSignatureError(message, tx_id=tx_id, payload=payload)

        if isinstance(reason, dict) and 'Custom' in reason:
            code = reason['Custom']
            if index in system_instructions and code == _SYSTEM_ACCOUNT_ALREADY_IN_USE:
                return AccountInUseError(message, tx_id=tx_id, payload=payload)

            return ProgramError(message, tx_id=tx_id, payload=payload, instruction_index=index, code=code)

        return ProgramError(message, tx_id=tx_id, payload=payload, instruction_index=index)

    return RejectionError(message, tx_id=tx_id, payload=payload)
