from typing import List, Optional

from featurebench.config.settings import ComparisonSettings, PoolSettings, RecorderSettings, SharedStateSettings
from featurebench.consts.ChapterType import ChapterType


class LessonConfig:
    chapters: List[ChapterType]
    log_level: str
    output_cwd: Optional[str]
    recorder: RecorderSettings
    pool: PoolSettings
    shared_state: SharedStateSettings
    comparison: ComparisonSettings
