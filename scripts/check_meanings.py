import asyncio
import sys
from pathlib import Path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root / "src"))
from lookup.config import find_dictionary_path
from lookup.resolver import lookup_word
from lookup.termbank import load_dictionary

path = find_dictionary_path()
if path is None:
    print("No dictionary found. Set WORDLOOKUP_DICT_PATH or put jmdict_english under data/")
    sys.exit(1)

print(f"Loading dictionary from {path}...")
index = load_dictionary(path)

words = sys.argv[1:] or ["食べられなかった", "来ない", "きた", "だ", "です"]
for w in words:
    results = asyncio.run(lookup_word(index, w))
    if results:
        print(f"Word: {w}")
        for r in results[:3]:
            path_str = " > ".join(r.inflection_path) or "-"
            print(f"  {r.dictionary_form} [{r.reading}] ({path_str}): {'; '.join(r.definitions[:3])}")
    else:
        print(f"Word: {w} - Not found")
