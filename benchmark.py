import numpy as np
from suffix_tree_package import SuffixTreeWrapper
from suffix_tree_package.python_backend.alphabet import LETTERS, SENTINEL
import time
from typing import List, Tuple
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

def generate_random_texts(n: int, length: int, alphabet_size: int) -> List[str]:
    """Generate n random texts of given length over the first alphabet_size letters, sentinel appended"""
    letters = list(LETTERS[:alphabet_size])
    return [''.join(np.random.choice(letters, length)) + SENTINEL for _ in range(n)]

def run_benchmark(n_texts: int, text_length: int, alphabet_size: int) -> Tuple[float, float, float]:
    """Run benchmark and return average build, index and query time per text"""
    texts = generate_random_texts(n_texts, text_length, alphabet_size)

    build_time = 0.0
    index_time = 0.0
    query_time = 0.0
    for text in texts:
        start_time = time.perf_counter()
        tree = SuffixTreeWrapper(text, build_index=False)
        build_time += time.perf_counter() - start_time

        start_time = time.perf_counter()
        tree.index_suffixes()
        index_time += time.perf_counter() - start_time

        start_time = time.perf_counter()
        tree.longest_repeated_substring()
        tree.shortest_unique_substring()
        query_time += time.perf_counter() - start_time

    return build_time / n_texts, index_time / n_texts, query_time / n_texts

def main():
    # Test parameters
    text_lengths = [1_000, 2_000, 5_000, 10_000, 20_000]  # Different text lengths
    alphabet_sizes = [2, 4, 26]  # Small alphabets give deep trees, large ones wide trees
    n_texts = 5

    # Results storage
    results = []

    try:
        # Run benchmarks
        for alphabet_size in alphabet_sizes:
            for text_length in text_lengths:
                print(f"Testing: {n_texts} texts of length {text_length} over {alphabet_size} letters")
                build_time, index_time, query_time = run_benchmark(n_texts, text_length, alphabet_size)

                results.append({
                    'alphabet_size': alphabet_size,
                    'text_length': text_length,
                    'build_time': build_time,
                    'index_time': index_time,
                    'query_time': query_time,
                    # Roughly flat across lengths if construction is linear
                    'build_us_per_symbol': build_time / (text_length + 1) * 1e6
                })

        # Convert to DataFrame and save results
        df = pd.DataFrame(results)
        df.to_csv('benchmark_results.csv', index=False)

        # Print summary statistics
        print("\nBenchmark Summary:")
        print("=================")
        for alphabet_size in alphabet_sizes:
            data = df[df['alphabet_size'] == alphabet_size]
            print(f"\nAlphabet of {alphabet_size} letters")
            print(f"Build cost per symbol: {data['build_us_per_symbol'].min():.2f}-{data['build_us_per_symbol'].max():.2f} us")
            print(f"Largest text built in {data['build_time'].max():.3f}s")

        # Create visualization
        sns.set_theme(style='whitegrid')
        plt.figure(figsize=(12, 6))

        # Plot build time vs text length
        plt.subplot(1, 2, 1)
        sns.lineplot(data=df, x='text_length', y='build_time', hue='alphabet_size',
                     marker='o', palette='deep')
        plt.xlabel('Text Length')
        plt.ylabel('Build Time (s)')
        plt.title('Construction Time vs Text Length')

        # Plot cost per symbol
        plt.subplot(1, 2, 2)
        sns.lineplot(data=df, x='text_length', y='build_us_per_symbol', hue='alphabet_size',
                     marker='o', palette='deep')
        plt.xlabel('Text Length')
        plt.ylabel('Microseconds per Symbol')
        plt.title('Construction Cost per Symbol')

        plt.tight_layout()
        plt.savefig('benchmark_results.png', dpi=300, bbox_inches='tight')
        plt.close()

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user.")

if __name__ == '__main__':
    main()
