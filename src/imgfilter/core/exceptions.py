"""项目内使用的自定义异常定义。"""


class ImageFilterError(Exception):
    """基础异常类型。"""


class InvalidConfigurationError(ImageFilterError):
    """配置不合法时抛出。"""


class SourceEnumerationError(ImageFilterError):
    """源目录无法读取时抛出，整批任务随之中止。"""


class ChannelClosedError(ImageFilterError):
    """向已关闭的通道发送、重复关闭或从已关闭且为空的通道接收时抛出。"""
