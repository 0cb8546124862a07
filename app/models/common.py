"""Common models and base classes"""

from typing import Any, Dict, Union

# Addresses are stored either as a single free-text line or as a mapping
# such as {"street": ..., "city": ...}
AddressValue = Union[str, Dict[str, Any]]
