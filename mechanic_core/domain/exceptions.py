"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 API 层做统一捕获与用户提示。

生成服务相关的错误全部继承 GenerationError：对聊天处理器而言，
网络失败、鉴权失败、限流和响应格式错误是同一种结果（500），
细分类型只用于日志。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "STORE_WRITE_ERROR"）。
        message: 可读错误信息（仅写日志，不直接返回给调用方）。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider、status 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ValidationError(BusinessError):
    """请求体或配置校验失败。"""


class GenerationError(BusinessError):
    """生成服务调用失败的统一基类。"""

    def __init__(self, code: str, message: str, http_status: int = 500, **extra):
        super().__init__(code, message, http_status, **extra)


class MissingApiKeyError(GenerationError):
    """当前 Provider 未配置 API Key。"""


class NetworkError(GenerationError):
    """网络层错误，例如连接失败、超时等。"""


class AuthenticationError(GenerationError):
    """Provider 返回 401/403。"""


class RateLimitError(GenerationError):
    """Provider 限流（429）。本项目不做重试。"""


class ApiError(GenerationError):
    """第三方 API 返回其他非 2xx 状态时抛出。"""


class MalformedResponseError(GenerationError):
    """响应体不是合法 JSON 或结构不符合预期。"""


class UnknownModelError(GenerationError):
    """逻辑模型名在 registry 中没有对应配置。"""


class PersistenceError(BusinessError):
    """存储读写失败。"""

    def __init__(self, code: str, message: str, http_status: int = 500, **extra):
        super().__init__(code, message, http_status, **extra)
