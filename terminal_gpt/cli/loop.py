"""终端交互循环。

两种状态：Running 与 Terminated。
- 输入流失败（EOF、Ctrl+C、读写异常）、请求进行中按下 Ctrl+C 或输入 exit（不区分大小写）时终止；
- 对话轮次失败只打印一行错误描述到错误流，然后继续下一轮。
"""

import sys
from typing import Optional, TextIO

from terminal_gpt.agents.exchange import ExchangeExecutor
from terminal_gpt.domain.conversation import ConversationState
from terminal_gpt.domain.exceptions import ExchangeError
from terminal_gpt.infrastructure.logging.logger import logger

BANNER = "Let's go. (Quit by typing exit.)"
PROMPT = "\n-->You: "
EXIT_COMMAND = "exit"


class InteractiveLoop:
    def __init__(
        self,
        executor: ExchangeExecutor,
        state: ConversationState,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self._executor = executor
        self._state = state
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr

    def run(self) -> int:
        """运行直到终止，返回尝试过的轮次数。"""

        print(BANNER, file=self._out)
        turns = 0
        while True:
            user_input = self.read_user_input()
            if user_input is None:
                break
            if user_input.lower() == EXIT_COMMAND:
                break
            turns += 1
            try:
                self._executor.execute_turn(self._state, user_input)
            except ExchangeError as e:
                print(e.describe(), file=self._err)
                continue
            except KeyboardInterrupt:
                # 与提示符处的 Ctrl+C 一样结束会话
                print("Interrupted", file=self._err)
                break
        logger.info("Session ended", extra={"extra": {"turns": turns, "messages": len(self._state)}})
        return turns

    def read_user_input(self) -> Optional[str]:
        """打印提示符并读取一行，输入流失败或 EOF 时返回 None。"""

        try:
            self._out.write(PROMPT)
            self._out.flush()
            line = self._in.readline()
        except (EOFError, KeyboardInterrupt, OSError) as e:
            print(f"Error reading user input: {e!r}", file=self._err)
            return None
        if not line:
            # EOF
            return None
        return line.strip()

    @property
    def _in(self) -> TextIO:
        return self._stdin or sys.stdin

    @property
    def _out(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def _err(self) -> TextIO:
        return self._stderr or sys.stderr
