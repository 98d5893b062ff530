# -*- coding: utf-8 -*-
"""
Visualize face signatures - codec steps and gallery distance matrix
"""

import sys
import cv2
import numpy as np
import matplotlib.pyplot as plt

from face_attendance.config import settings, thresholds
from face_attendance.core.detector import create_detector, largest_box
from face_attendance.core.matcher import signature_distance
from face_attendance.core.signature import SignatureCodec, crop
from face_attendance.database.gallery import GalleryStore, iter_gallery_dir


def visualize_codec(image_path):
    """Show each signature step for one image"""
    image = cv2.imread(image_path)
    if image is None:
        print(f"✗ Cannot load: {image_path}")
        return

    detector = create_detector()
    codec = SignatureCodec()

    box = largest_box(detector.detect(image, min_neighbors=settings.ENROLL_MIN_NEIGHBORS))
    if box is None:
        print("✗ No face detected!")
        return

    face = crop(image, box)
    gray = codec.to_gray(face)
    resized = cv2.resize(gray, (codec.width, codec.height))
    signature = codec.encode(face)

    steps = [
        (cv2.cvtColor(face, cv2.COLOR_BGR2RGB), f"Crop {face.shape[1]}x{face.shape[0]}"),
        (gray, "Grayscale"),
        (resized, f"Resize {codec.width}x{codec.height}"),
        (signature, "Equalized (signature)"),
    ]

    fig, axes = plt.subplots(2, len(steps), figsize=(14, 7))
    for ax, (img, title) in zip(axes[0], steps):
        ax.imshow(img, cmap=None if img.ndim == 3 else 'gray')
        ax.set_title(title, fontsize=10)
        ax.axis('off')

    for ax, (img, title) in zip(axes[1], steps[1:]):
        ax.hist(img.ravel(), bins=64, range=(0, 255), color='gray')
        ax.set_title(f"{title} histogram", fontsize=9)
    axes[1][-1].axis('off')

    plt.suptitle('Signature Pipeline', fontsize=14, fontweight='bold')
    plt.tight_layout()
    plt.savefig('signature_steps.png', dpi=150, bbox_inches='tight')
    print("✓ Saved: signature_steps.png")
    plt.show()


def visualize_gallery(gallery_dir):
    """Pairwise distance heatmap between enrolled identities"""
    gallery = GalleryStore.load(iter_gallery_dir(gallery_dir), create_detector(), SignatureCodec())
    entries = gallery.all()
    names = [name for name, _ in entries]

    n = len(entries)
    matrix = np.zeros((n, n))
    for i, (_, a) in enumerate(entries):
        for j, (_, b) in enumerate(entries):
            matrix[i, j] = signature_distance(a, b)

    print(f"\nIdentities: {n}")
    if n > 1:
        off_diag = matrix[~np.eye(n, dtype=bool)]
        print(f"Closest pair distance: {off_diag.min():.1f}")
        print(f"Reject threshold:      {thresholds.REJECT_THRESHOLD:.1f}")
        if off_diag.min() < thresholds.REJECT_THRESHOLD:
            print("⚠ Some enrolled faces are closer than the reject threshold")

    plt.figure(figsize=(max(6, n), max(5, n * 0.8)))
    plt.imshow(matrix, cmap='viridis')
    plt.colorbar(label='Mean squared difference')
    plt.xticks(range(n), names, rotation=45, ha='right')
    plt.yticks(range(n), names)
    plt.title('Gallery Signature Distances', fontsize=14, fontweight='bold')
    plt.tight_layout()
    plt.savefig('gallery_distances.png', dpi=150, bbox_inches='tight')
    print("✓ Saved: gallery_distances.png")
    plt.show()


def main():
    if len(sys.argv) < 2:
        print("Usage: python visualize_signatures.py <image_path | gallery_dir>")
        print("\nExample:")
        print("  python visualize_signatures.py photos/alice.jpg")
        print("  python visualize_signatures.py photos")
        return

    import os
    target = sys.argv[1]
    if os.path.isdir(target):
        visualize_gallery(target)
    else:
        visualize_codec(target)


if __name__ == "__main__":
    main()
