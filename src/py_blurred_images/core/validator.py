"""级别校验模块。

校验级别语法和质量值；不合法的级别只会被跳过，不会终止运行。
"""

from typing import Any

from ..exceptions import LevelValidationError
from ..models.blur_config import ResolvedOptions
from ..models.constants import LEVEL_PATTERN
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


class LevelValidators:
    """级别相关的验证器集合"""

    @staticmethod
    def is_valid_level(level: Any) -> bool:
        """检查级别是否为数字或百分比字符串

        可选的前导数字、可选的单个小数点、至少一位数字、可选的结尾 %。
        """
        if level is None or level == "" or isinstance(level, bool):
            return False
        return LEVEL_PATTERN.match(str(level)) is not None

    @staticmethod
    def is_valid_quality(quality: Any) -> bool:
        if isinstance(quality, bool) or not isinstance(quality, int | float):
            return False
        return quality > 1

    @staticmethod
    def validate(options: ResolvedOptions) -> ResolvedOptions:
        """校验单个级别

        Raises:
            LevelValidationError: 级别或质量值非法时
        """
        if options.level is None or options.level == "":
            raise LevelValidationError(MessageFormatter.missing_level())

        if not LevelValidators.is_valid_level(options.level):
            raise LevelValidationError(MessageFormatter.invalid_level(options.level))

        if not LevelValidators.is_valid_quality(options.quality):
            raise LevelValidationError(MessageFormatter.invalid_quality(options.quality))

        return options


def filter_valid_levels(
    resolved: list[ResolvedOptions],
) -> tuple[list[ResolvedOptions], list[int]]:
    """过滤掉非法级别并记录警告

    Returns:
        tuple: (合法级别列表, 被跳过的级别 id 列表)
    """
    valid: list[ResolvedOptions] = []
    skipped: list[int] = []

    for options in resolved:
        try:
            valid.append(LevelValidators.validate(options))
        except LevelValidationError as e:
            logger.warning(e.message)
            skipped.append(options.id)

    return valid, skipped
