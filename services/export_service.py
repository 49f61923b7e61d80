# services/export_service.py
from docx import Document
from docx.shared import Pt
from docx.oxml.ns import qn

from models.memo_models import Memo
from models.session_models import Snapshot
from services.snapshot_service import serialize_snapshot
from services.storage_service import dump_json


class ExportService:
    """メモやデータ全体をファイルとして書き出すサービスクラス。

    JSONの書き出しはローカル保存と同じシリアライズを用いるため、
    同じ瞬間のスナップショットであればローカル保存の内容とバイト単位で一致する。
    """

    @staticmethod
    def memo_to_json(memo: Memo) -> str:
        return dump_json(memo.to_dict())

    @staticmethod
    def snapshot_to_json(snapshot: Snapshot) -> str:
        return serialize_snapshot(snapshot)

    @staticmethod
    def write_text(file_path: str, text: str) -> None:
        """テキストをUTF-8でファイルに書き出す。

        Raises:
            OSError: 書き込みに失敗した場合。
        """
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(text)

    def export_memo_json(self, memo: Memo, file_path: str) -> None:
        self.write_text(file_path, self.memo_to_json(memo))

    def export_all_json(self, snapshot: Snapshot, file_path: str) -> None:
        self.write_text(file_path, self.snapshot_to_json(snapshot))

    def export_memo_docx(self, memo: Memo, file_path: str) -> None:
        """メモをWord文書として書き出す。

        タイトルを見出し、本文を段落（改行ごと）として出力する。

        Args:
            memo (Memo): 書き出すメモ。
            file_path (str): 出力先パス。
        """
        doc = Document()
        style = doc.styles['Normal']
        style.font.name = 'MS Mincho'
        style.font.size = Pt(11)
        style._element.rPr.rFonts.set(qn('w:eastAsia'), 'MS Mincho')

        doc.add_heading(memo.title, level=1)
        for line in memo.content.split('\n'):
            doc.add_paragraph(line)
        doc.save(file_path)
