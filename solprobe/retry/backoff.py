class Backoff:
    """Provides the amount of time to wait before trying again.
    """

    def get_backoff(self, attempts: int) -> float:
        """Returns the amount of time to wait before trying again.

        :param attempts: The number of attempts that have occurred (starts at 1).
        :return: The float number of seconds to wait
        """
        raise NotImplementedError('Backoff is an abstract class. Subclasses must implement get_backoff().')


class ExponentialBackoff(Backoff):
    """A backoff that grows exponentially with the number of attempts.

    With a `base_delay` of 0.5 and a `base` of 3, the delays are 0.5, 1.5, 4.5, 13.5, etc.

    :param base_delay: The first delay, in seconds.
    :param base: The factor applied to the delay after each attempt.
    """

    def __init__(self, base_delay: float, base: float):
        self.base_delay = base_delay
        self.base = base

    def get_backoff(self, attempts: int) -> float:
        return self.base_delay * (self.base ** (attempts - 1))


class BinaryExponentialBackoff(ExponentialBackoff):
    """An ExponentialBackoff with a base of 2, e.g. 0.5, 1, 2, 4 for a `base_delay` of 0.5.

    :param: base_delay: The first delay, in seconds.
    """

    def __init__(self, base_delay: float):
        super(BinaryExponentialBackoff, self).__init__(base_delay, 2)
