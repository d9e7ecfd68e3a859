"""领域层模型与异常。

包含：
- models: Role 枚举与不可变的 ChatMessage。
- conversation: 只追加的内存会话 ConversationState。
- exceptions: 业务异常与对话轮次的错误分类。
"""
