"""领域层模型与协议。

包含：
- models: 统一的 GenerationConfig / GenerationRequest / GenerationResult 模型。
- transcript: 聊天记录 TranscriptEntry 及 TranscriptStore 抽象。
- records: 联系/预约表单记录及 SubmissionStore 抽象。
- payloads: 入站请求体的 pydantic 校验模型。
- exceptions: 业务异常类型定义。
"""
