"""
Script file parser - converts text scripts to label mappings.

Text scripts hold one statement per line, grouped under labels:

```
// Lines starting with // are comments
# begin
r Hello, I am Bean.
t:happy Hi, I am Skuller.
disableNextPrompt sayHi r I can say hi too!

# finish
r That's all folks!
```

Statements written before the first label form the unnamed sequence.
Alternatives and structured statements need JSON scripts.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class ParsedScript:
    """A parsed text script."""
    id: str
    labels: dict[str, list[str]] = field(default_factory=dict)
    sequence: list[str] = field(default_factory=list)


class ScriptFileParser:
    """
    Parses text scripts.

    A header repeating an earlier label appends to that label.
    """

    LABEL_PATTERN = re.compile(r'^#\s*(\w+)\s*$')
    COMMENT_PREFIX = '//'

    def parse_file(self, path: str | Path) -> ParsedScript:
        """Parse a script file. The script id is the file stem."""
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        script = self.parse_string(content)
        script.id = path.stem
        return script

    def parse_string(self, content: str) -> ParsedScript:
        """Parse a script string."""
        script = ParsedScript(id="parsed")
        current: list[str] = script.sequence

        for line in content.splitlines():
            line = line.strip()

            if not line or line.startswith(self.COMMENT_PREFIX):
                continue

            match = self.LABEL_PATTERN.match(line)
            if match:
                current = script.labels.setdefault(match.group(1), [])
                continue

            current.append(line)

        return script

    def to_json(self, script: ParsedScript) -> dict:
        """Convert a parsed script to the JSON script format."""
        return {
            'id': script.id,
            'labels': script.labels,
            'sequence': script.sequence,
        }

    def save_json(self, script: ParsedScript, path: str | Path) -> None:
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_json(script), f, indent=2)


def compile_script_file(input_path: str | Path, output_path: Optional[str | Path] = None) -> Path:
    """
    Compile a text script to JSON.

    Args:
        input_path: Path to the .script file
        output_path: Path to the output .json file (default: same name with .json)

    Returns:
        The output path
    """
    input_path = Path(input_path)
    output_path = input_path.with_suffix('.json') if output_path is None else Path(output_path)

    parser = ScriptFileParser()
    script = parser.parse_file(input_path)
    parser.save_json(script, output_path)
    logger.info(f"Compiled {input_path} -> {output_path}")
    return output_path
