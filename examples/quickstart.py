from percepthash import ImageHasher

hasher = ImageHasher(preset="default")

a = hasher.perceptual_hash("./cat1.jpg")
b = hasher.perceptual_hash("./cat1-modified.jpg")
print("phash:", a, b)

for method in ("ahash", "dhash", "phash", "whash"):
    c = hasher.compare("./cat1.jpg", "./cat2.jpg", method=method)
    print(f"{method}: distance={c.distance}/{c.bit_length} similarity={c.similarity:.2%} dup={c.is_duplicate}")

print(hasher.find_duplicates(["./cat1.jpg", "./cat1-modified.jpg", "./cat2.jpg"]))
