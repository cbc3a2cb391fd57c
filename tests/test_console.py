import main


class RecordingBot:
    def __init__(self):
        self.messages = []

    def on_message(self, conversation_id, text):
        self.messages.append((conversation_id, text))
        return [{"type": "message", "text": f"echo {text}"}]


def run_console(monkeypatch, lines):
    bot = RecordingBot()
    replies = iter(lines)
    monkeypatch.setattr(main, "BankingBot", lambda: bot)
    monkeypatch.setattr("builtins.input", lambda: next(replies))
    main.main()
    return bot


def test_quit_is_sent_to_the_bot(monkeypatch, capsys):
    bot = run_console(monkeypatch, ["Make a transaction", "quit", "exit"])

    assert bot.messages == [("console", "Make a transaction"), ("console", "quit")]
    assert "Bot: echo quit" in capsys.readouterr().out


def test_exit_leaves_without_messaging_the_bot(monkeypatch):
    bot = run_console(monkeypatch, [" Exit "])

    assert bot.messages == []
