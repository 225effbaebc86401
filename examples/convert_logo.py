"""Convert a PNG logo to a multi-size ICO for a Windows executable."""
import sys
from pathlib import Path

from imgico import convert_image_to_ico
from imgico.config import STANDARD_SIZES
from imgico.preview import describe_ico

def create_ico(png_path, ico_path):
    png_path = Path(png_path)
    ico_path = Path(ico_path)

    if not png_path.exists():
        print(f"Error: {png_path} not found")
        return False

    # All six standard sizes, largest last
    data = convert_image_to_ico(png_path, ico_path, sizes=STANDARD_SIZES)
    print('\n'.join(describe_ico(data)))
    print(f"Created: {ico_path}")
    return True

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python convert_logo.py LOGO.png [OUTPUT.ico]")
        sys.exit(2)
    source = Path(sys.argv[1])
    target = Path(sys.argv[2]) if len(sys.argv) > 2 else source.with_suffix('.ico')
    sys.exit(0 if create_ico(source, target) else 1)
