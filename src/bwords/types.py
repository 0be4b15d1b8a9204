from typing import Literal

Style = Literal["standard", "uri", "minimal"]
