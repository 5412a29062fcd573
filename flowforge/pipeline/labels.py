"""Label classifier shared by the filter and the validator.

Generated graphs often degrade to placeholder labels ("node1", "Step 3",
"42"). Both the node filter and the validator's meaningful-node count go
through `is_meaningful`, so the two can never disagree on what a placeholder
looks like.
"""

import re
from typing import Any


# "node", "Node_2", "element-7", "item 3", "STEP12"
_GENERIC_LABEL = re.compile(r"(?:node|element|item|step)[\s_-]*\d*", re.IGNORECASE)
_DIGITS_ONLY = re.compile(r"\d+")


def is_meaningful(label: Any) -> bool:
    """Return True when a label carries real content.

    Total: non-string input is simply not meaningful.
    """
    if not isinstance(label, str):
        return False
    text = label.strip()
    if not text:
        return False
    if _GENERIC_LABEL.fullmatch(text) or _DIGITS_ONLY.fullmatch(text):
        return False
    return True
