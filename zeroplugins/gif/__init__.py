"""Avatar meme GIFs: canvas and workspace helpers and two sets of animations."""