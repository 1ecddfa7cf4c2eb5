from pathlib import Path

import pytest

from streamcine.services.catalog_store import CatalogPaths, CatalogStore


CHANNELS_CSV = """nome;grupo;url
Canal A;Noticias;http://x/a.ts
Canal B;Esportes;http://x/b.m3u8
"""

MOVIES_CSV = """index;titulo;ano;genero;logo;fundo;sinopse;url
10;Zorro;1998;Ação;http://l/z.png;http://b/z.jpg;Hero;http://x/zorro.mp4
11;alien;1979;Terror;;;;http://x/alien.ts
;Amélie;abc;Ação;;;;http://x/amelie.mkv
12;No Url;2000;Drama;;;;
"""

PERSONAL_MOVIES_CSV = """titulo,url,genero
Zeta,https://drive.google.com/file/d/FILE1/view?usp=sharing,
alpha,https://www.dropbox.com/s/abc/alpha.mp4?dl=1,Comédia
"""

SERIES_CSV = """nome,grupo,logo,url
Breaking Bad S01E02,Drama,,http://x/bb102.mp4
Breaking Bad S01E01,,http://logo/bb.png,http://x/bb101.ts
Breaking Bad [L] S02E01,Crime,,http://x/bb201.mp4
Dark S01E01,Sci-Fi,http://logo/dark.png,http://x/dark101.m3u8
Standalone Special,Extras,,http://x/special.mp4
!!! S01E01,,,http://x/weird.mp4
,Drama,,http://x/noname.mp4
Missing Url S01E01,Drama,,
"""

SOAP_OPERAS_CSV = """nome;grupo;tvg-logo;url
Avenida Brasil S01E002;Novelas Globo;;http://x/ab2.mp4
Avenida Brasil S01E001;;http://l/ab.png;http://x/ab1.mp4
"""


@pytest.fixture
def write_file(tmp_path: Path):
    """Write text into tmp_path and return the file path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """Directory holding the five sample catalog files."""
    files = {
        "canais_tv.csv": CHANNELS_CSV,
        "filmes.csv": MOVIES_CSV,
        "filmes_pessoais.csv": PERSONAL_MOVIES_CSV,
        "series_episodios.csv": SERIES_CSV,
        "novelas.csv": SOAP_OPERAS_CSV,
    }
    for name, content in files.items():
        (tmp_path / name).write_text(content, encoding="utf-8")
    return tmp_path


@pytest.fixture
def store(catalog_dir: Path) -> CatalogStore:
    return CatalogStore(CatalogPaths.from_directory(catalog_dir))
