"""Release publishing flow.

- version / branches / dist_tag: release rules derived from the version
- validation: checks on the built package output
- prompts: operator interaction
- workflow: the publish sequence itself
"""

from __future__ import annotations
