import os

ASSET_DIRS = ('css', 'js', 'images')


def ensure_asset_dirs(output_dir):
    """Create assets/{css,js,images} under the output root.

    Only the directories are ensured; stylesheet, script and image files are
    placed there outside this pipeline.
    """
    assets_dir = os.path.join(output_dir, 'assets')
    created = []
    for name in ASSET_DIRS:
        path = os.path.join(assets_dir, name)
        os.makedirs(path, exist_ok=True)
        created.append(path)
    return created
