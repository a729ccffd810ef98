from theme_pipes import __main__ as cli


def test_main_prints_chapter_themes(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "TOKENS_DIR", tmp_path / "tokens")

    book = tmp_path / "book.txt"
    book.write_text(
        "CHAPTER 1 soldiers fought battle CHAPTER 2 love and harmony",
        encoding="utf-8",
    )
    war = tmp_path / "war.txt"
    war.write_text("fought battle", encoding="utf-8")
    peace = tmp_path / "peace.txt"
    peace.write_text("love harmony", encoding="utf-8")

    assert cli.main([str(book), str(war), str(peace)]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "Chapter 1: war-related",
        "Chapter 2: peace-related",
    ]
    assert (tmp_path / "tokens" / "tokenized_book.txt").exists()


def test_main_without_book_prints_nothing(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "TOKENS_DIR", tmp_path / "tokens")

    assert cli.main([str(tmp_path / "missing.txt"), str(tmp_path / "missing_war.txt")]) == 0

    assert capsys.readouterr().out == ""
    assert not (tmp_path / "tokens").exists()


def test_main_without_term_lists_is_all_peace(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "TOKENS_DIR", tmp_path / "tokens")

    book = tmp_path / "book.txt"
    book.write_text("CHAPTER 1 battle CHAPTER 2 love", encoding="utf-8")

    cli.main([str(book), str(tmp_path / "none.txt"), str(tmp_path / "none.txt")])

    assert capsys.readouterr().out.splitlines() == [
        "Chapter 1: peace-related",
        "Chapter 2: peace-related",
    ]
