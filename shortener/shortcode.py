"""Base62 short code encoding."""

import string


class ShortCodeEncoder:
    """Encode counter values as Base62 short codes.

    The alphabet is digits, then lowercase, then uppercase letters, so
    ``encode(0) == "0"``, ``encode(61) == "Z"`` and ``encode(62) == "10"``.
    """

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.digits + string.ascii_lowercase + string.ascii_uppercase
    BASE = len(BASE62_CHARS)

    _INDEX = {char: i for i, char in enumerate(BASE62_CHARS)}

    def encode(self, num: int) -> str:
        """Convert a non-negative integer to a base62 string.

        Args:
            num: Integer to convert

        Returns:
            Base62 string without leading zero symbols

        Raises:
            ValueError: If num is negative
        """
        if num < 0:
            raise ValueError(f"Cannot encode negative value: {num}")

        if num == 0:
            return self.BASE62_CHARS[0]

        result = []
        while num > 0:
            num, remainder = divmod(num, self.BASE)
            result.append(self.BASE62_CHARS[remainder])

        return ''.join(reversed(result))

    def decode(self, code: str) -> int:
        """Convert a base62 string back to an integer.

        Args:
            code: Base62 string

        Returns:
            Integer value

        Raises:
            ValueError: If code is empty or has characters outside the alphabet
        """
        if not code:
            raise ValueError("Cannot decode an empty code")

        result = 0
        for char in code:
            try:
                result = result * self.BASE + self._INDEX[char]
            except KeyError:
                raise ValueError(f"Invalid base62 character: {char!r}") from None

        return result

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check that code is non-empty and uses only base62 characters."""
        return bool(code) and all(c in ShortCodeEncoder._INDEX for c in code)
