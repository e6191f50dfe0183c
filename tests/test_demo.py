"""Tests for the command-line demo."""

from demo import main


class TestDemo:
    """Tests for demo.main."""

    def test_round_trip_output(self, capsys):
        assert main(["--bits", "64", "--seed", "3"]) == 0
        out = capsys.readouterr().out
        assert "BB84 Protocol Results" in out
        assert "Encrypted Message: Message(ciphertext=" in out
        assert "Decrypted Message: Hello, ANOPHEL!" in out

    def test_custom_message(self, capsys):
        assert main(["--bits", "64", "--seed", "9", "--message", "Hello, Bob!", "--sender", "Bob"]) == 0
        out = capsys.readouterr().out
        assert "sender='Bob'" in out
        assert "Decrypted Message: Hello, Bob!" in out

    def test_circuit_preview(self, capsys):
        assert main(["--bits", "32", "--seed", "1", "--circuit"]) == 0
        assert "PREPARATION CIRCUIT" in capsys.readouterr().out

    def test_invalid_bits(self, capsys):
        assert main(["--bits", "0"]) == 1
        assert "Error running BB84" in capsys.readouterr().err
