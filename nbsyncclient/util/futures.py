"""
Small building blocks for code that runs in continuations of concurrent requests.
"""

import threading


class FanIn(object):
    """
    Collects a fixed number of results that arrive from concurrently running
    continuations and hands them over, in completion order, to a single callback
    once the last one arrived.

    Example:
    >>> join = FanIn(2, lambda results: print(results))
    >>> join.add("b")
    >>> join.add("a")
    ['b', 'a']
    """

    def __init__(self, expected, on_complete):
        """
        Constructor.

        :param expected: The number of results to wait for.
        :type expected: int
        :param on_complete: Called exactly once with the list of results.
        :type on_complete: callable
        """
        if expected < 0:
            raise ValueError("Can't wait for a negative number of results: %d" % expected)

        self.__expected = expected
        self.__on_complete = on_complete
        self.__results = []
        self.__lock = threading.Lock()

        if expected == 0:
            on_complete([])

    #
    # Properties
    #

    @property
    def expected(self):
        return self.__expected

    @property
    def pending(self):
        with self.__lock:
            return self.__expected - len(self.__results)

    #
    # Methods
    #

    def add(self, result):
        """
        Add one result. The callback fires on the thread that adds the last result.
        """
        with self.__lock:
            if len(self.__results) >= self.__expected:
                raise RuntimeError("Got more results than the expected %d" % self.__expected)
            self.__results.append(result)
            done = len(self.__results) == self.__expected
            results = list(self.__results) if done else None

        if done:
            self.__on_complete(results)
