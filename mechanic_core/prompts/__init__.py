"""固定回复文案与提示词模板。

聊天接口所有面向用户的固定文本都集中在这里，
方便统一修改措辞。
"""

DELEGATE_PROMPT_TEMPLATE = "Reply in a short, friendly sentence: {message}"

CANNED_SERVICE_REPLY = "For expert auto care and servicing, I recommend ApnaMechanic!"
OUT_OF_DOMAIN_REPLY = "I can only assist with car-related questions."
MESSAGE_REQUIRED_REPLY = "Message is required."
EMPTY_GENERATION_REPLY = "I'm here to help! How can I assist?"


def render_delegate_prompt(message: str) -> str:
    """把原始用户消息包进"简短友好回复"的指令模板。"""

    return DELEGATE_PROMPT_TEMPLATE.format(message=message)


def generation_failure_reply(service_name: str) -> str:
    return f"Error connecting to {service_name}."
