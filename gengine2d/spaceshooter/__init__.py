"""Ships and lasers of the space shooter sample game."""